from enum import Enum
from typing import Any, Dict, Type
from sqlalchemy import Integer
from sqlalchemy.types import TypeDecorator


class CodedEnum(TypeDecorator):
    """Stores a str Enum as a small integer code and loads it back as the Enum member."""

    impl = Integer
    cache_ok = True

    def __init__(self, enum_class: Type[Enum], codes: Dict[Enum, int], *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.enum_class = enum_class
        self._to_code = dict(codes)
        self._from_code = {code: member for member, code in codes.items()}

    def process_bind_param(self, value: Any, dialect: Any) -> Any:
        if value is None:
            return None
        member = value if isinstance(value, self.enum_class) else self.enum_class(value)
        return self._to_code[member]

    def process_result_value(self, value: Any, dialect: Any) -> Any:
        if value is None:
            return None
        try:
            return self._from_code[value]
        except KeyError:
            raise ValueError(f"Unknown {self.enum_class.__name__} code: {value}") from None
