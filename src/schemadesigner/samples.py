"""Ready-made field trees for demos and tests."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from schemadesigner.exceptions import FieldTreeError
from schemadesigner.typing.models import SchemaField

_URL_PATTERN = "^https?://.*$"

_USERS: dict[str, Any] = {
    "name": "Users",
    "type": "object",
    "children": [
        {"name": "id", "type": "string", "validations": {"required": True}, "description": "Unique identifier for the user"},
        {
            "name": "username",
            "type": "string",
            "validations": {"required": True, "min": 3, "max": 20},
            "description": "Unique username for the user",
        },
        {
            "name": "email",
            "type": "string",
            "validations": {"required": True, "regex": r"^[\w-\.]+@([\w-]+\.)+[\w-]{2,4}$"},
            "description": "Email address",
        },
        {
            "name": "password",
            "type": "string",
            "validations": {"required": True, "min": 8},
            "description": "User password (min 8 characters)",
        },
        {"name": "age", "type": "number", "validations": {"min": 13}, "description": "User age (must be at least 13)"},
        {"name": "isActive", "type": "boolean", "validations": {"required": True}, "description": "Active status"},
        {
            "name": "role",
            "type": "enum",
            "enumValues": ["user", "admin", "moderator"],
            "validations": {"required": True},
            "description": "User role in the system",
        },
        {"name": "lastLogin", "type": "date", "description": "Last login timestamp"},
        {
            "name": "profile",
            "type": "object",
            "children": [
                {"name": "fullName", "type": "string", "validations": {"required": True}, "description": "Full name of the user"},
                {
                    "name": "bio",
                    "type": "string",
                    "validations": {"max": 500},
                    "description": "User biography (max 500 characters)",
                },
                {
                    "name": "avatarUrl",
                    "type": "string",
                    "validations": {"regex": _URL_PATTERN},
                    "description": "URL to user's avatar image",
                },
            ],
        },
        {
            "name": "socialMedia",
            "type": "array",
            "children": [
                {
                    "name": "account",
                    "type": "object",
                    "children": [
                        {
                            "name": "platform",
                            "type": "enum",
                            "enumValues": ["twitter", "facebook", "instagram", "linkedin"],
                            "validations": {"required": True},
                        },
                        {"name": "username", "type": "string", "validations": {"required": True}},
                        {"name": "url", "type": "string", "validations": {"regex": _URL_PATTERN}},
                    ],
                },
            ],
            "description": "List of user's social media accounts",
        },
    ],
}

_PRODUCTS: dict[str, Any] = {
    "name": "Products",
    "type": "object",
    "children": [
        {"name": "id", "type": "string", "validations": {"required": True}, "description": "Unique identifier for the product"},
        {"name": "name", "type": "string", "validations": {"required": True, "min": 2, "max": 100}, "description": "Product name"},
        {"name": "description", "type": "string", "validations": {"max": 1000}, "description": "Detailed product description"},
        {"name": "price", "type": "number", "validations": {"required": True, "min": 0}, "description": "Product price in cents"},
        {
            "name": "category",
            "type": "enum",
            "enumValues": ["electronics", "clothing", "books", "home", "other"],
            "validations": {"required": True},
            "description": "Product category",
        },
        {
            "name": "tags",
            "type": "array",
            "children": [{"name": "tag", "type": "string"}],
            "description": "Product tags for easy searching",
        },
        {"name": "inStock", "type": "boolean", "validations": {"required": True}, "description": "Whether the product is in stock"},
        {"name": "createdAt", "type": "date", "validations": {"required": True}, "description": "Product creation date"},
        {
            "name": "dimensions",
            "type": "object",
            "children": [
                {"name": axis, "type": "number", "validations": {"required": True, "min": 0}, "description": f"{axis.title()} in centimeters"}
                for axis in ("width", "height", "depth")
            ],
            "description": "Product dimensions",
        },
        {
            "name": "reviews",
            "type": "array",
            "children": [
                {
                    "name": "review",
                    "type": "object",
                    "children": [
                        {
                            "name": "userId",
                            "type": "string",
                            "validations": {"required": True},
                            "description": "ID of the user who left the review",
                        },
                        {
                            "name": "rating",
                            "type": "number",
                            "validations": {"required": True, "min": 1, "max": 5},
                            "description": "Rating from 1 to 5",
                        },
                        {
                            "name": "comment",
                            "type": "string",
                            "validations": {"max": 500},
                            "description": "Review comment (max 500 characters)",
                        },
                        {"name": "createdAt", "type": "date", "validations": {"required": True}, "description": "Review creation date"},
                    ],
                },
            ],
            "description": "Product reviews",
        },
    ],
}

_ORDERS: dict[str, Any] = {
    "name": "Orders",
    "type": "object",
    "children": [
        {"name": "id", "type": "string", "validations": {"required": True}, "description": "Unique identifier for the order"},
        {"name": "userId", "type": "string", "validations": {"required": True}, "description": "ID of the user who placed the order"},
        {
            "name": "status",
            "type": "enum",
            "enumValues": ["pending", "processing", "shipped", "delivered", "cancelled"],
            "validations": {"required": True},
            "description": "Current status of the order",
        },
        {"name": "createdAt", "type": "date", "validations": {"required": True}, "description": "Order creation date"},
        {
            "name": "items",
            "type": "array",
            "children": [
                {
                    "name": "item",
                    "type": "object",
                    "children": [
                        {"name": "productId", "type": "string", "validations": {"required": True}, "description": "ID of the ordered product"},
                        {
                            "name": "quantity",
                            "type": "number",
                            "validations": {"required": True, "min": 1},
                            "description": "Quantity of the product ordered",
                        },
                        {
                            "name": "price",
                            "type": "number",
                            "validations": {"required": True, "min": 0},
                            "description": "Price of the product at the time of order",
                        },
                    ],
                },
            ],
            "description": "List of items in the order",
        },
        {
            "name": "shippingAddress",
            "type": "object",
            "children": [
                {"name": "street", "type": "string", "validations": {"required": True}, "description": "Street address"},
                {"name": "city", "type": "string", "validations": {"required": True}, "description": "City"},
                {"name": "state", "type": "string", "validations": {"required": True}, "description": "State/Province"},
                {"name": "country", "type": "string", "validations": {"required": True}, "description": "Country"},
                {"name": "zipCode", "type": "string", "validations": {"required": True}, "description": "ZIP/Postal code"},
            ],
            "description": "Shipping address for the order",
        },
        {
            "name": "totalAmount",
            "type": "calculated",
            "calculatedField": {
                "dependencies": ["items"],
                "formula": "items.reduce((sum, item) => sum + item.price * item.quantity, 0)",
            },
            "description": "Total order amount",
        },
        {"name": "tax", "type": "number", "validations": {"required": True, "min": 0}, "description": "Tax amount for the order"},
        {
            "name": "shippingCost",
            "type": "number",
            "validations": {"required": True, "min": 0},
            "description": "Shipping cost for the order",
        },
        {
            "name": "grandTotal",
            "type": "calculated",
            "calculatedField": {
                "dependencies": ["totalAmount", "tax", "shippingCost"],
                "formula": "totalAmount + tax + shippingCost",
            },
            "description": "Grand total including tax and shipping",
        },
    ],
}

SAMPLE_COLLECTIONS: MappingProxyType[str, SchemaField] = MappingProxyType(
    {
        "users": SchemaField.model_validate(_USERS),
        "products": SchemaField.model_validate(_PRODUCTS),
        "orders": SchemaField.model_validate(_ORDERS),
    },
)


def get_sample(name: str) -> SchemaField:
    """Return a sample field tree by name.

    Args:
        name (str): `users`, `products` or `orders`.

    Raises:
        FieldTreeError: If no sample has this name.

    Returns:
        SchemaField: Sample tree.
    """
    try:
        return SAMPLE_COLLECTIONS[name.lower()]
    except KeyError as exc:
        supported = ", ".join(SAMPLE_COLLECTIONS)
        raise FieldTreeError(message=f"Unknown sample '{name}'. Expected one of: {supported}") from exc
