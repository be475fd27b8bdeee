from __future__ import annotations

from fractions import Fraction
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, conint


class Quantity(BaseModel):
    """
    A number written as a chain of fraction components.

    The first component is the integer part, every following one a
    `/`-prefixed denominator: "1/2" is (1, 2), "3" is (3,).
    """
    model_config = ConfigDict(frozen=True)

    components: Tuple[conint(ge=0), ...] = Field(min_length=1)

    @classmethod
    def from_fraction(cls, value: Fraction) -> Quantity:
        if value.denominator == 1:
            return cls(components=(value.numerator,))
        return cls(components=(value.numerator, value.denominator))

    @property
    def value(self) -> Fraction:
        result = Fraction(self.components[0])
        for denominator in self.components[1:]:
            result /= denominator
        return result

    def __str__(self) -> str:
        return "/".join(str(c) for c in self.components)


class Amount(BaseModel):
    """One or more alternative quantities plus optional scaling and unit."""
    model_config = ConfigDict(frozen=True)

    alternatives: Tuple[Quantity, ...] = Field(min_length=1)
    scalable: bool = False
    unit: Optional[str] = None

    @property
    def quantity(self) -> Quantity:
        return self.alternatives[0]

    @property
    def is_alternative(self) -> bool:
        return len(self.alternatives) > 1

    @property
    def values(self) -> List[Fraction]:
        return [q.value for q in self.alternatives]

    def __add__(self, other: Amount) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        if self.unit != other.unit:
            raise ValueError(f"cannot add amounts in '{self.unit}' and '{other.unit}'")
        if self.scalable != other.scalable:
            raise ValueError("cannot add a scalable amount to a fixed one")
        if len(self.alternatives) != len(other.alternatives):
            raise ValueError("cannot add amounts with a different number of alternatives")
        return Amount(
            alternatives=tuple(
                Quantity.from_fraction(a + b) for a, b in zip(self.values, other.values)
            ),
            scalable=self.scalable,
            unit=self.unit,
        )


class Span(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: int
    end: int


class Text(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str
    span: Optional[Span] = None


class Ingredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["ingredient"] = "ingredient"
    name: str
    description: Optional[str] = None
    amount: Optional[Amount] = None
    note: Optional[str] = None
    span: Optional[Span] = None

    @property
    def display_name(self) -> str:
        if self.description:
            return f"{self.name} {self.description}"
        return self.name


class Cookware(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["cookware"] = "cookware"
    name: str
    description: Optional[str] = None
    amount: Optional[Amount] = None
    # `{}` after the name: used as-is
    has_bracket: bool = False
    span: Optional[Span] = None

    @property
    def display_name(self) -> str:
        if self.description:
            return f"{self.name} {self.description}"
        return self.name


class Timer(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["timer"] = "timer"
    amount: Amount
    span: Optional[Span] = None


Segment = Annotated[Union[Text, Ingredient, Cookware, Timer], Field(discriminator="kind")]
Value = Union[Amount, str]


class Step(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int = 0
    segments: Tuple[Segment, ...] = ()

    @property
    def ingredients(self) -> List[Ingredient]:
        return [s for s in self.segments if isinstance(s, Ingredient)]

    @property
    def cookware(self) -> List[Cookware]:
        return [s for s in self.segments if isinstance(s, Cookware)]

    @property
    def timers(self) -> List[Timer]:
        return [s for s in self.segments if isinstance(s, Timer)]


class Property(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: Value
    line: int = 0


class Recipe(BaseModel):
    """
    Parsed recipe: ordered steps plus document metadata.

    `metadata` is the key/value mapping after the duplicate-key policy was
    applied, `properties` every metadata line in source order.
    """
    model_config = ConfigDict(frozen=True)

    source: str = ""
    steps: Tuple[Step, ...] = ()
    metadata: Dict[str, Value] = {}
    properties: Tuple[Property, ...] = ()

    @property
    def ingredients(self) -> List[Ingredient]:
        return [i for step in self.steps for i in step.ingredients]

    @property
    def cookware(self) -> List[Cookware]:
        return [c for step in self.steps for c in step.cookware]

    @property
    def timers(self) -> List[Timer]:
        return [t for step in self.steps for t in step.timers]

    @property
    def servings(self) -> Optional[List[Fraction]]:
        value = self.metadata.get("servings")
        if isinstance(value, Amount):
            return value.values
        return None

    def outline(self) -> dict:
        """Structure without source text, line numbers or spans."""
        return self.model_dump(
            mode="json",
            exclude={
                "source": True,
                "steps": {"__all__": {"line": True, "segments": {"__all__": {"span": True}}}},
                "properties": {"__all__": {"line": True}},
            },
        )
