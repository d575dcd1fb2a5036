"""Output-to-workspace mapping models and the OUTPUT:SPEC token parser.

File formats:
- mapping file: ``{"VGA-1": [1, 2, 3], "HDMI-A-1": [4, 5]}``
- previous-workspace file: ``["3:web", 3]``
"""

from typing import Annotated, Any, Dict, Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

from ..errors import MappingSpecError

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


def normalize_numbers(numbers: Iterable[int]) -> List[int]:
    """Sort ascending and drop duplicates."""
    return sorted(set(numbers))


class MappingFile(RootModel[Dict[str, List[Int32]]]):
    """Validated content of the mapping file.

    Number lists are normalized on load so that hand-edited files still
    satisfy the sorted/unique invariant.
    """

    root: Dict[str, List[Int32]] = Field(default_factory=dict)

    @field_validator("root")
    @classmethod
    def normalize(cls, v: Dict[str, List[int]]) -> Dict[str, List[int]]:
        return {output: normalize_numbers(numbers) for output, numbers in v.items()}


class PreviousWorkspace(BaseModel):
    """The workspace that lost focus in the last observed workspace event."""

    model_config = ConfigDict(frozen=True)

    name: str
    num: Int32

    @model_validator(mode="before")
    @classmethod
    def from_pair(cls, data: Any) -> Any:
        """Accept the on-disk ``[name, num]`` pair."""
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"expected [name, num] pair, got {len(data)} element(s)")
            return {"name": data[0], "num": data[1]}
        return data

    def to_pair(self) -> List[Any]:
        return [self.name, self.num]


def _parse_int(part: str, token: str) -> int:
    try:
        value = int(part.strip())
    except ValueError as e:
        raise MappingSpecError(token, f"'{part}' - {e}")
    if not INT32_MIN <= value <= INT32_MAX:
        raise MappingSpecError(token, f"'{part}' - number out of range")
    return value


def parse_mapping_spec(token: str) -> Tuple[str, List[int]]:
    """Parse one ``OUTPUT:SPEC`` token.

    SPEC is a comma separated list whose items are either a single number or
    an inclusive range ``A-B`` (endpoints in any order). The result is sorted
    and de-duplicated.

    Args:
        token: Raw command line token, e.g. ``"VGA-1:1-3"``

    Returns:
        (output identifier, workspace numbers)

    Raises:
        MappingSpecError: If the token has no colon, an empty output or an
            unparsable number

    Examples:
        >>> parse_mapping_spec("VGA-1:5,2,2")
        ('VGA-1', [2, 5])
        >>> parse_mapping_spec("VGA-1:3-1")
        ('VGA-1', [1, 2, 3])
    """
    # Output descriptors may contain spaces but never a colon in the spec part
    output, sep, spec = token.rpartition(":")
    if not sep:
        raise MappingSpecError(token, "must contain colon as separator")
    if not output:
        raise MappingSpecError(token, "output must not be empty")

    numbers: List[int] = []
    for part in spec.split(","):
        if "-" in part:
            left, _, right = part.partition("-")
            low = _parse_int(left, token)
            high = _parse_int(right, token)
            if low > high:
                low, high = high, low
            numbers.extend(range(low, high + 1))
        else:
            numbers.append(_parse_int(part, token))

    return output, normalize_numbers(numbers)

