"""
Data Models

Value objects passed between pipeline stages: rectangles, icon anchors,
per-image field sets and the start/end session delta.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, Tuple

# (x, y) top-left of a matched icon in source-image pixels
Anchor = Tuple[int, int]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def scaled(self, scale_x: float, scale_y: float) -> 'Rect':
        """
        Scale every component, truncating toward zero.

        Args:
            scale_x: Horizontal factor (applied to x and width)
            scale_y: Vertical factor (applied to y and height)

        Returns:
            New scaled Rect
        """
        return Rect(
            x=int(self.x * scale_x),
            y=int(self.y * scale_y),
            width=int(self.width * scale_x),
            height=int(self.height * scale_y),
        )

    def translated(self, dx: int, dy: int) -> 'Rect':
        """Return the same rectangle moved by (dx, dy)."""
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def fits_within(self, width: int, height: int) -> bool:
        """Check the rectangle is non-empty and lies inside a width x height image."""
        if self.width <= 0 or self.height <= 0:
            return False
        if self.x < 0 or self.y < 0:
            return False
        return self.right <= width and self.bottom <= height

    def as_box(self) -> Tuple[int, int, int, int]:
        """PIL-style (left, upper, right, lower) box."""
        return (self.x, self.y, self.right, self.bottom)


@dataclass(frozen=True)
class IconAnchors:
    """Located icon positions for one screenshot (None = not found)."""
    currency: Optional[Anchor] = None
    counter: Optional[Anchor] = None
    fragment: Optional[Anchor] = None


@dataclass(frozen=True)
class RegionSet:
    """Text regions to recognize, one optional rectangle per field."""
    level: Optional[Rect] = None
    exp: Optional[Rect] = None
    currency: Optional[Rect] = None
    counter: Optional[Rect] = None
    fragment: Optional[Rect] = None

    def items(self):
        """Iterate (name, rect) pairs in recognition order, including absent ones."""
        for f in fields(self):
            yield f.name, getattr(self, f.name)


@dataclass(frozen=True)
class FieldSet:
    """
    Structured result of analyzing one screenshot.

    Every field is independently optional. None means the value was not
    recognized; it is never substituted with zero at this level.

    Attributes:
        level: Character level
        exp_percent: Experience progress within the level, [0, 100)
        currency: Currency amount
        counter: Bounded counter, [0, 20]
        gauge: Sub-unit progress of the counter, [0, 1000)
        fragments: Fragment count, [0, 99999]
    """
    level: Optional[int] = None
    exp_percent: Optional[float] = None
    currency: Optional[int] = None
    counter: Optional[int] = None
    gauge: Optional[int] = None
    fragments: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FieldSet':
        """
        Build a FieldSet from a mapping such as a decoded JSON record.

        Unknown keys are ignored; missing keys become None.

        Args:
            data: Mapping of field name to value or None

        Returns:
            FieldSet instance
        """
        def _get(name: str, kind: type) -> Any:
            value = data.get(name)
            return None if value is None else kind(value)

        return cls(
            level=_get("level", int),
            exp_percent=_get("exp_percent", float),
            currency=_get("currency", int),
            counter=_get("counter", int),
            gauge=_get("gauge", int),
            fragments=_get("fragments", int),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a dict with six nullable fields."""
        return asdict(self)

    def recognized_count(self) -> int:
        """Number of fields that carry a value."""
        return sum(1 for value in asdict(self).values() if value is not None)


@dataclass(frozen=True)
class SessionDelta:
    """
    Start-to-end difference between two screenshots of a hunting session.

    Absent source fields are recorded as 0. Inspect the source FieldSets
    to tell a recognized zero from a missing value.
    """
    start_level: int
    end_level: int
    start_exp_percent: float
    end_exp_percent: float
    exp_gained: float
    start_currency: int
    end_currency: int
    currency_gained: int
    start_counter: int
    end_counter: int
    start_gauge: int
    end_gauge: int
    counter_gained: float
    start_fragments: int
    end_fragments: int
    fragments_gained: int

    @property
    def counter_rollover_suspected(self) -> bool:
        """
        True when the combined counter+gauge total went down.

        The gain is reported as a plain difference; a negative value may
        mean the counter was spent or wrapped during the session.
        """
        return self.counter_gained < 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the persistence layer."""
        return asdict(self)
