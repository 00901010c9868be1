import enum

from sqlalchemy import Enum


class BaseEnum(str, enum.Enum):
    """
    String enum whose values are what clients send and what postgres stores
    """

    @classmethod
    def has(cls, item: object) -> bool:
        # Exact, case sensitive match on the value
        return isinstance(item, str) and item in cls.list_all()

    @classmethod
    def list_all(cls) -> list[str]:
        return [e.value for e in cls]

    @classmethod
    def as_column_type(cls, name: str) -> Enum:
        """
        Native postgres enum storing values rather than member names
        """
        return Enum(cls, name=name, values_callable=lambda members: [member.value for member in members])

    def __str__(self) -> str:
        return str(self.value)
