"""Base pydantic model of the transaction and access list types."""

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Model = TypeVar("Model", bound="CamelModel")


class CamelModel(BaseModel):
    """
    Model whose fields are named in camel case in their JSON form.

    Field values go through the loose-input base types, so a model accepts
    ints, numeric strings, hex strings and bytes, and renders numbers and bytes
    as `0x`-prefixed hex. For example `max_fee_per_gas=1` is serialized as
    `"maxFeePerGas": "0x1"`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )

    def serialize(
        self,
        mode: Literal["json", "python"],
        by_alias: bool,
        exclude_none: bool = True,
    ) -> dict[str, Any]:
        """
        Dump the model, leaving out unset optional fields by default.

        :param mode: `"json"` renders numbers and bytes as hex strings,
            `"python"` keeps the field objects.
        :param by_alias: Use the camel case field names.
        :param exclude_none: Leave out fields whose value is None.
        """
        return self.model_dump(mode=mode, by_alias=by_alias, exclude_none=exclude_none)

    def copy(self: Model, **kwargs) -> Model:
        """Return a copy of the model with `kwargs` applied, validated again."""
        return self.__class__(**(self.model_dump(exclude_unset=True) | kwargs))

    def __repr_args__(self):
        """Show the non-None fields, scalars in their hex form."""
        for name in self.serialize(mode="python", by_alias=False):
            value = getattr(self, name)
            match value:
                case list() | tuple() | dict() | BaseModel():
                    yield name, value
                case _:
                    yield name, str(value)
