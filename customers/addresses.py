"""
Mapping between the API address shape and the Address model.

The API nests region and country:

    {"street_address_1": "...", "locality": "...", "postal_code": "...",
     "region": {"name": "Victoria", "code": "VIC"},
     "country": {"name": "Australia", "code": "AU"}}

while the model stores them flat (region_name, region_code, ...).
"""

from django import forms
from django.forms.models import model_to_dict

from .models import Address

PLAIN_FIELDS = (
    "first_name",
    "last_name",
    "phone",
    "street_address_1",
    "street_address_2",
    "postal_code",
    "locality",
    "latitude",
    "longitude",
)
NESTED_FIELDS = ("region", "country")


class AddressForm(forms.ModelForm):
    class Meta:
        model = Address
        fields = list(PLAIN_FIELDS) + ["region_name", "region_code", "country_name", "country_code"]


def flatten_address(payload):
    """Turn an API address into Address field values. Unknown keys are dropped."""
    attributes = {key: payload[key] for key in PLAIN_FIELDS if key in payload}
    for nested in NESTED_FIELDS:
        value = payload.get(nested) or {}
        if not isinstance(value, dict):
            raise forms.ValidationError(f"{nested} must be an object with name and code")
        for part in ("name", "code"):
            if part in value:
                attributes[f"{nested}_{part}"] = value[part]
    return attributes


def build_address(payload, instance=None):
    """
    Return an unsaved-or-updated AddressForm for the payload.

    An existing address is updated in place so customers sharing nothing
    else keep a stable address id.
    """
    if not isinstance(payload, dict):
        raise forms.ValidationError("Address must be an object")
    data = {}
    if instance is not None:
        data.update(model_to_dict(instance, fields=AddressForm._meta.fields))
    data.update(flatten_address(payload))
    return AddressForm(data={k: v for k, v in data.items() if v is not None}, instance=instance)


def serialize_address(address):
    if address is None:
        return None
    return {
        "first_name": address.first_name,
        "last_name": address.last_name,
        "phone": address.phone,
        "street_address_1": address.street_address_1,
        "street_address_2": address.street_address_2,
        "postal_code": address.postal_code,
        "locality": address.locality,
        "latitude": float(address.latitude) if address.latitude is not None else None,
        "longitude": float(address.longitude) if address.longitude is not None else None,
        "region": {"name": address.region_name, "code": address.region_code},
        "country": {"name": address.country_name, "code": address.country_code},
    }
