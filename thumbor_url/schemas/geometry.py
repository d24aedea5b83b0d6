from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from thumbor_url.core.errors import configuration_error


class Coords(BaseModel):
    """A point (or a width/height pair) in pixels."""
    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    @classmethod
    def of(cls, value: "CoordsLike") -> "Coords":
        """Build coordinates from a `Coords`, an `(x, y)` tuple or a single length."""
        if isinstance(value, Coords):
            return value
        if isinstance(value, int):
            return cls(x=value, y=value)
        x, y = value
        return cls(x=x, y=y)

    def __add__(self, other: "Coords") -> "Coords":
        return Coords(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Coords") -> "Coords":
        return Coords(x=self.x - other.x, y=self.y - other.y)

    def __str__(self) -> str:
        return f"{self.x}x{self.y}"


CoordsLike = Union[Coords, Tuple[int, int], int]


class Rect(BaseModel):
    """A box given by its top-left and bottom-right corners.

    Used for manual crops (rendered `LEFTxTOP:RIGHTxBOTTOM`) and focal regions.
    """
    model_config = ConfigDict(frozen=True)

    top_left: Coords = Field(..., description="Left-top point of the box")
    bottom_right: Coords = Field(..., description="Right-bottom point of the box")

    @model_validator(mode="after")
    def check_corners(self) -> "Rect":
        if self.top_left.x < 0 or self.top_left.y < 0:
            raise ValueError(f"corner {self.top_left} has negative coordinates")
        if self.bottom_right.x <= self.top_left.x:
            raise ValueError(
                f"right edge {self.bottom_right.x} must be greater than left edge {self.top_left.x}"
            )
        if self.bottom_right.y <= self.top_left.y:
            raise ValueError(
                f"bottom edge {self.bottom_right.y} must be greater than top edge {self.top_left.y}"
            )
        return self

    @classmethod
    def checked(cls, top_left: Coords, bottom_right: Coords, field: str = "crop") -> "Rect":
        """Like the constructor, but reports a bad box as a ConfigurationError for `field`."""
        try:
            return cls(top_left=top_left, bottom_right=bottom_right)
        except ValidationError as e:
            raise configuration_error(field, e)

    @classmethod
    def from_points(cls, top_left: CoordsLike, bottom_right: CoordsLike, field: str = "crop") -> "Rect":
        try:
            top_left, bottom_right = Coords.of(top_left), Coords.of(bottom_right)
        except ValidationError as e:
            raise configuration_error(field, e)
        return cls.checked(top_left, bottom_right, field)

    @classmethod
    def from_center(cls, center: CoordsLike, width: int, height: int) -> "Rect":
        """Build the box of the given size centered on `center`."""
        center = Coords.of(center)
        top_left = Coords(x=center.x - width // 2, y=center.y - height // 2)
        return cls.checked(top_left, top_left + Coords(x=width, y=height))

    @property
    def left(self) -> int:
        return self.top_left.x

    @property
    def top(self) -> int:
        return self.top_left.y

    @property
    def right(self) -> int:
        return self.bottom_right.x

    @property
    def bottom(self) -> int:
        return self.bottom_right.y

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def center(self) -> Coords:
        return Coords(x=(self.left + self.right) // 2, y=(self.top + self.bottom) // 2)

    def scale(self, factor: float) -> "Rect":
        """Grow or shrink the box around its center.

        Raises:
            ConfigurationError: If the result leaves the image (negative
                corner) or collapses to nothing
        """
        center = self.center()

        def _scaled(corner: Coords) -> Coords:
            offset = corner - center
            return center + Coords(x=int(offset.x * factor), y=int(offset.y * factor))

        return Rect.checked(_scaled(self.top_left), _scaled(self.bottom_right))

    def __str__(self) -> str:
        return f"{self.top_left}:{self.bottom_right}"


RectLike = Union[Rect, Tuple[CoordsLike, CoordsLike]]


def to_rect(value: RectLike, field: str = "crop") -> Rect:
    """Accept a `Rect` or a `(top_left, bottom_right)` pair."""
    if isinstance(value, Rect):
        return value
    top_left, bottom_right = value
    return Rect.from_points(top_left, bottom_right, field)
