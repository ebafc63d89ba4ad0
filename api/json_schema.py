"""
JSON:API schema builders.

A schema class declares its attributes, required attributes and relationship
names; ``schema()`` describes a single-resource response, ``collection()`` a
paginated list. Extra attribute groups are registered per class and pulled in
with typed ``WithExtension`` descriptors:

    class ProductSchema(JsonApiSchema):
        object_name = "product"
        attributes = {"name": {"type": "string"}}

    @ProductSchema.extension("stock")
    def stock_attributes(include_reserved=False):
        ...

    ProductSchema.collection(with_=WithExtension("stock", required=True))
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence, Union


@dataclass(frozen=True)
class WithExtension:
    name: str
    required: bool = False
    options: Mapping[str, Any] = field(default_factory=dict)


ExtensionArg = Union[WithExtension, Sequence[WithExtension], None]


class UnknownExtension(KeyError):
    pass


def is_singular(name: str) -> bool:
    return not name.endswith("s") or name.endswith("ss")


class RelationshipSchema:
    @staticmethod
    def _identifier(name):
        return {
            "type": "object",
            "properties": {
                "id": {"type": "string"},
                "type": {"type": "string", "example": name},
            },
        }

    @classmethod
    def schema(cls, name: str) -> dict:
        return {
            "type": "object",
            "properties": {"data": cls._identifier(name)},
        }

    @classmethod
    def collection(cls, name: str) -> dict:
        return {
            "type": "object",
            "properties": {"data": {"type": "array", "items": cls._identifier(name)}},
        }


class JsonApiSchema:
    object_name: str = ""
    attributes: dict = {}
    required_attributes: list = []
    relationships: list = []

    _extensions: dict = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # Each schema gets its own registry, seeded with its parent's
        cls._extensions = dict(cls._extensions)

    @classmethod
    def extension(cls, name: str) -> Callable:
        """Register a function returning extra attributes under ``name``."""

        def register(builder):
            cls._extensions[name] = builder
            return builder

        return register

    @classmethod
    def all_attributes(cls) -> list:
        return list(cls.attributes)

    @classmethod
    def schema(cls, require_all: bool = False, with_: ExtensionArg = None) -> dict:
        return {
            "type": "object",
            "properties": {
                "data": {
                    "type": "object",
                    "properties": cls._data_properties(require_all, with_),
                },
                "meta": {"type": "object"},
                "links": {"type": "object"},
            },
            "required": ["data"],
        }

    @classmethod
    def collection(cls, require_all: bool = False, with_: ExtensionArg = None) -> dict:
        return {
            "type": "object",
            "properties": {
                "data": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": cls._data_properties(require_all, with_),
                    },
                },
                "meta": {
                    "type": "object",
                    "properties": {
                        "pagination": {
                            "type": "object",
                            "properties": {
                                "results": {"type": "integer", "example": 250},
                                "pages": {"type": "integer", "example": 5},
                                "page": {"type": "integer", "example": 2},
                                "per_page": {"type": "integer", "example": 50},
                            },
                        }
                    },
                    "required": ["pagination"],
                },
                "links": {
                    "type": "object",
                    "properties": {
                        "self": {"type": "string"},
                        "first": {"type": "string"},
                        "prev": {"type": "string", "nullable": True},
                        "next": {"type": "string", "nullable": True},
                        "last": {"type": "string"},
                    },
                },
            },
            "required": ["data", "meta", "links"],
        }

    @classmethod
    def _resolve_extensions(cls, with_: ExtensionArg):
        if with_ is None:
            return []
        if isinstance(with_, WithExtension):
            with_ = [with_]

        resolved = []
        for descriptor in with_:
            if not isinstance(descriptor, WithExtension):
                raise TypeError(f"Expected WithExtension, got {type(descriptor).__name__}")
            try:
                builder = cls._extensions[descriptor.name]
            except KeyError:
                raise UnknownExtension(f"{cls.__name__} has no extension {descriptor.name!r}") from None
            resolved.append((descriptor, builder(**descriptor.options)))
        return resolved

    @classmethod
    def _data_properties(cls, require_all, with_):
        attributes = dict(cls.attributes)
        required = list(cls.all_attributes() if require_all else cls.required_attributes)

        for descriptor, extra in cls._resolve_extensions(with_):
            attributes.update(extra)
            if descriptor.required:
                required += [name for name in extra if name not in required]

        return {
            "id": {"type": "string", "example": "1"},
            "type": {"type": "string", "example": cls.object_name},
            "attributes": {
                "type": "object",
                "properties": attributes,
                "required": required,
            },
            "relationships": {
                "type": "object",
                "properties": {
                    name: (
                        RelationshipSchema.schema(name)
                        if is_singular(name)
                        else RelationshipSchema.collection(name)
                    )
                    for name in cls.relationships
                },
            },
        }
