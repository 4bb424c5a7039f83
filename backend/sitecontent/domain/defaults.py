# sitecontent/domain/defaults.py
"""
Baseline site content shipped with the application.

This is what visitors see before anybody edits the site. It is shown for
display only and is never written to the store by the save path.
"""
import copy

from sitecontent.normalizers.content import parse_content

DEFAULT_CONTENT_VERSION = 3

DEFAULT_HERO_TITLE = "ПІДМОТКА СПІДОМЕТРА — У ВАШИХ РУКАХ"

# Pricing module id -> baseline price
DEFAULT_MODULE_PRICES = {
    "can-module": "2500",
    "analog-module": "1800",
    "ops-module": "3200",
}

DEFAULT_CONTENT = {
    "version": DEFAULT_CONTENT_VERSION,
    "siteName": "Speedometer Modules",
    "blocks": [
        {
            "id": "hero",
            "type": "hero",
            "title": DEFAULT_HERO_TITLE,
            "subtitle": "Модулі корекції пробігу для CAN, аналогових та OPS панелей",
            "buttonText": "Обрати модуль",
            "order": 1,
        },
        {
            "id": "features",
            "type": "features",
            "title": "Чому обирають нас",
            "items": [
                "Встановлення за 15 хвилин",
                "Без втручання в прошивку",
                "Гарантія 12 місяців",
            ],
            "order": 2,
        },
        {
            "id": "modules",
            "type": "modules",
            "title": "Наші модулі",
            "order": 3,
        },
        {
            "id": "can-module",
            "type": "module",
            "title": "CAN модуль",
            "price": DEFAULT_MODULE_PRICES["can-module"],
            "description": "Для автомобілів з цифровою шиною CAN",
            "order": 4,
        },
        {
            "id": "analog-module",
            "type": "module",
            "title": "Аналоговий модуль",
            "price": DEFAULT_MODULE_PRICES["analog-module"],
            "description": "Для панелей з аналоговим сигналом швидкості",
            "order": 5,
        },
        {
            "id": "ops-module",
            "type": "module",
            "title": "OPS модуль",
            "price": DEFAULT_MODULE_PRICES["ops-module"],
            "description": "Для систем з датчиком OPS",
            "order": 6,
        },
        {
            "id": "videos",
            "type": "videos",
            "title": "Відео встановлення",
            "videos": [],
            "order": 50,
        },
        {
            "id": "contacts",
            "type": "contacts",
            "title": "Контакти",
            "phone": "+380 00 000 00 00",
            "telegram": "",
            "order": 51,
        },
    ],
}


def default_content():
    """Returns a fresh baseline snapshot."""
    return parse_content(copy.deepcopy(DEFAULT_CONTENT))
