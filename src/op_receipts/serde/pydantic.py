"""Base pydantic classes of the JSON form of receipts."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    A base model that converts field names to camel case when serializing.

    For example, the field name `cumulative_gas_used` in a Python model will
    be represented as `cumulativeGasUsed` when it is serialized to json.
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
        Serializes the model to the specified format with the given parameters.

        :param mode: The mode of serialization.
              If mode is 'json', the output will only contain JSON serializable types.
              If mode is 'python', the output may contain non-JSON-serializable Python objects.
        :param by_alias: Whether to use aliases for field names.
        :param exclude_none: Whether to exclude fields with None values, default is True.
        :return: The serialized representation of the model.
        """
        return self.model_dump(mode=mode, by_alias=by_alias, exclude_none=exclude_none)
