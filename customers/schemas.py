from api.json_schema import JsonApiSchema


class CustomerSchema(JsonApiSchema):
    object_name = "customer"

    attributes = {
        "id": {"type": "integer", "example": 1},
        "enterprise_id": {"type": "integer", "example": 2},
        "first_name": {"type": "string", "nullable": True, "example": "Alice"},
        "last_name": {"type": "string", "nullable": True, "example": "Springs"},
        "code": {"type": "string", "nullable": True, "example": "BUYER1"},
        "email": {"type": "string", "example": "alice@example.com"},
        "tags": {"type": "array", "items": {"type": "string"}, "example": ["staff", "discount"]},
        "billing_address": {"type": "object", "nullable": True},
        "shipping_address": {"type": "object", "nullable": True},
    }

    required_attributes = ["id", "enterprise_id", "email"]

    relationships = ["enterprise"]


@CustomerSchema.extension("balance")
def customer_balance(include_time=False):
    attributes = {
        "balance": {"type": "number", "format": "double", "example": -20.0},
    }
    if include_time:
        attributes["balance_time"] = {"type": "string", "format": "date-time"}
    return attributes
