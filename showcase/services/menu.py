"""Restaurant menu: listing, seeding and server-side item pricing."""

import logging

from showcase.errors import ValidationError
from showcase.extensions import db
from showcase.models.menu import MenuCategory, MenuCustomization, MenuItem

logger = logging.getLogger(__name__)

DEFAULT_MENU = (
    {
        "name": "Tacos",
        "description": "Authentic street-style tacos on fresh corn tortillas",
        "items": (
            ("taco-carne-asada", "Carne Asada Taco", "Grilled marinated steak with cilantro, onions, and lime", 450, 8, None,
             (("Extra meat", 200), ("Add guacamole", 150), ("Extra cheese", 100), ("No cilantro", 0), ("No onions", 0))),
            ("taco-pollo", "Pollo Asado Taco", "Grilled chicken with pico de gallo and crema", 400, 8, "dairy",
             (("Extra chicken", 175), ("Add guacamole", 150), ("Extra cheese", 100), ("No crema", 0))),
            ("taco-carnitas", "Carnitas Taco", "Slow-cooked pork with pickled onions and salsa verde", 425, 8, None,
             (("Extra carnitas", 190), ("Add guacamole", 150), ("Extra spicy", 0))),
            ("taco-al-pastor", "Al Pastor Taco", "Marinated pork with pineapple, cilantro, and onions", 450, 8, None,
             (("Extra pork", 200), ("Add guacamole", 150), ("Extra pineapple", 50), ("No pineapple", 0))),
            ("taco-veggie", "Grilled Veggie Taco", "Seasonal grilled vegetables with black beans and salsa verde", 375, 7,
             None, (("Add guacamole", 150), ("Extra cheese", 100), ("Add beans", 75))),
            ("taco-fish", "Baja Fish Taco", "Crispy beer-battered fish with cabbage slaw and chipotle mayo", 500, 10,
             "gluten,dairy", (("Extra fish", 225), ("Add guacamole", 150), ("No mayo", 0))),
        ),
    },
    {
        "name": "Bowls",
        "description": "Build your own bowl with rice, beans, and toppings",
        "items": (
            ("bowl-carne-asada", "Carne Asada Bowl",
             "Rice, black beans, grilled steak, pico de gallo, cheese, and sour cream", 1050, 12, "dairy",
             (("Extra meat", 300), ("Add guacamole", 200), ("Extra cheese", 100), ("No beans", 0), ("Brown rice", 0))),
            ("bowl-pollo", "Pollo Asado Bowl", "Rice, black beans, grilled chicken, pico de gallo, and crema", 975, 12,
             "dairy", (("Extra chicken", 250), ("Add guacamole", 200), ("No crema", 0))),
        ),
    },
    {
        "name": "Sides & Drinks",
        "description": "Complete your meal",
        "items": (
            ("side-chips-guac", "Chips & Guacamole", "House-made tortilla chips with fresh guacamole", 550, 3, None, ()),
            ("drink-horchata", "Horchata", "Sweet cinnamon rice drink", 300, 1, "dairy", ()),
        ),
    },
)


def get_menu():
    """Active categories with their available items, in display order."""
    return (
        MenuCategory.query
        .filter_by(active=True)
        .order_by(MenuCategory.display_order.asc())
        .all()
    )


def seed_menu():
    """Create the default menu items that are missing. Returns the number of items created."""
    created = 0
    for order, defaults in enumerate(DEFAULT_MENU, start=1):
        category = MenuCategory.query.filter_by(name=defaults["name"]).first()
        if category is None:
            category = MenuCategory(name=defaults["name"], description=defaults["description"], display_order=order)
            db.session.add(category)
            db.session.flush()

        for position, (sku, name, description, price, prep, allergens, extras) in enumerate(defaults["items"], start=1):
            if MenuItem.query.filter_by(sku=sku).first():
                continue
            item = MenuItem(
                category_id=category.id,
                sku=sku,
                name=name,
                description=description,
                price_cents=price,
                prep_time_mins=prep,
                allergens=allergens,
                display_order=position,
            )
            item.customizations = [MenuCustomization(name=n, price_cents=p) for n, p in extras]
            db.session.add(item)
            created += 1
    db.session.commit()
    logger.info(f"Menu seeded ({created} items created)")
    return created


def apply_menu_prices(items):
    """
    Reprice parsed cart items whose sku is on the menu.

    Menu items take their name, unit price and customization prices from the
    menu. Items without a sku keep the submitted price.
    """
    skus = {item["sku"] for item in items if item["sku"]}
    if not skus:
        return items
    menu = {m.sku: m for m in MenuItem.query.filter(MenuItem.sku.in_(skus)).all()}

    for item in items:
        if not item["sku"]:
            continue
        menu_item = menu.get(item["sku"])
        if menu_item is None:
            raise ValidationError(f"Unknown menu item: {item['sku']}", field="items")
        if not menu_item.available:
            raise ValidationError(f"{menu_item.name} is not available", field="items")

        prices = menu_item.customization_prices()
        for custom in item["customizations"]:
            if custom["name"] not in prices:
                raise ValidationError(
                    f"Unknown customization for {menu_item.name}: {custom['name']}", field="items"
                )
            custom["price_cents"] = prices[custom["name"]]
        item["name"] = menu_item.name
        item["unit_cents"] = menu_item.price_cents
    return items
