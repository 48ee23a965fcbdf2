"""Editable static catalog configuration."""

from __future__ import annotations

CATEGORY_ROWS: list[dict[str, str]] = [
    {"id": "cat-entree", "code": "ENTREE", "name": "Entrées"},
    {"id": "cat-plat", "code": "PLAT", "name": "Plats"},
    {"id": "cat-dessert", "code": "DESSERT", "name": "Desserts"},
    {"id": "cat-accomp", "code": "ACCOMP", "name": "Accompagnements"},
    {"id": "cat-suppl", "code": "SUPPL", "name": "Suppléments"},
]

# Prices in XAF francs.
PRODUCT_ROWS: list[dict[str, str | int]] = [
    {"id": "p-ent-1", "name": "Mini-samoussas", "category_id": "cat-entree", "price": 800},
    {"id": "p-ent-2", "name": "Salade fraîche", "category_id": "cat-entree", "price": 700},
    {"id": "p-plt-1", "name": "Poulet DG", "category_id": "cat-plat", "price": 3500},
    {"id": "p-plt-2", "name": "Poisson braisé", "category_id": "cat-plat", "price": 4000},
    {"id": "p-des-1", "name": "Beignets banane", "category_id": "cat-dessert", "price": 600},
    {"id": "p-des-2", "name": "Ananas frais", "category_id": "cat-dessert", "price": 500},
    {"id": "p-acc-1", "name": "Plantains", "category_id": "cat-accomp", "price": 700},
    {"id": "p-acc-2", "name": "Pommes sautées", "category_id": "cat-accomp", "price": 800},
    {"id": "p-sup-1", "name": "Sauce piquante", "category_id": "cat-suppl", "price": 200},
    {"id": "p-sup-2", "name": "Portion riz", "category_id": "cat-suppl", "price": 500},
]

TABLE_ID_PREFIX = "T"
TABLE_NAME_PREFIX = "Table"

OPENING_COMMENT = "Ticket opened"
