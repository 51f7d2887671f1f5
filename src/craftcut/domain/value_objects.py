"""Value objects for the furniture panel domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Orientation(str, Enum):
    """How a board is positioned in 3D space.

    Attributes:
        HORIZONTAL: Shelf, top or bottom. Lies flat; the front view shows its
            front edge.
        VERTICAL: Side panel or divider. Stands upright running front to back.
        BACK: Back panel. Faces forward; the front view shows its full face.
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    BACK = "back"


class ZAlignment(str, Enum):
    """Z-axis placement for panels shallower than the furniture."""

    FRONT = "front"
    BACK = "back"
    CENTER = "center"


class MaterialType(str, Enum):
    """Sheet materials with known default thicknesses."""

    PLYWOOD = "plywood"
    MDF = "mdf"
    PARTICLEBOARD = "particleboard"
    MELAMINE = "melamine"
    SOLID_WOOD = "solid_wood"
    CUSTOM = "custom"


@dataclass(frozen=True)
class MaterialPreset:
    """Default settings for a sheet material.

    Attributes:
        material_type: Material identifier.
        name: Display name.
        default_thickness: Typical board thickness in mm.
        description: Short usage note.
    """

    material_type: MaterialType
    name: str
    default_thickness: float
    description: str


MATERIAL_PRESETS: dict[MaterialType, MaterialPreset] = {
    MaterialType.PLYWOOD: MaterialPreset(
        MaterialType.PLYWOOD, "Plywood", 18.0,
        "Versatile, strong, good for structural parts",
    ),
    MaterialType.MDF: MaterialPreset(
        MaterialType.MDF, "MDF", 18.0, "Smooth surface, great for painting"
    ),
    MaterialType.PARTICLEBOARD: MaterialPreset(
        MaterialType.PARTICLEBOARD, "Particleboard", 16.0,
        "Budget-friendly, good for hidden parts",
    ),
    MaterialType.MELAMINE: MaterialPreset(
        MaterialType.MELAMINE, "Melamine", 18.0, "Pre-finished, easy to clean"
    ),
    MaterialType.SOLID_WOOD: MaterialPreset(
        MaterialType.SOLID_WOOD, "Solid Wood", 20.0, "Premium, natural grain"
    ),
    MaterialType.CUSTOM: MaterialPreset(
        MaterialType.CUSTOM, "Custom", 18.0, "Custom material settings"
    ),
}


@dataclass(frozen=True)
class EdgeBanding:
    """Which edges of a panel receive edge banding.

    Top and bottom run along the cut length, left and right along the cut
    width.
    """

    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False

    @property
    def any(self) -> bool:
        """True if at least one edge is banded."""
        return self.top or self.bottom or self.left or self.right


@dataclass(frozen=True)
class Panel:
    """A board drawn in the 2D front view.

    The core treats panels as immutable values for the duration of one
    computation.

    Attributes:
        id: Unique panel identifier.
        width: Stored width in the front view.
        height: Stored height in the front view.
        label: Display name (may be empty).
        x: Left edge in the front view.
        y: Vertical position in the front view; smaller values are nearer
            the floor for assembly ordering.
        quantity: Number of identical pieces to cut.
        orientation: Maps the stored dimensions onto length, width and
            thickness.
        depth: Custom Z dimension; None uses the furniture depth.
        z_align: Z placement when depth is less than the furniture depth.
        edge_banding: Banded edges, if any.
    """

    id: str
    width: float
    height: float
    label: str = ""
    x: float = 0.0
    y: float = 0.0
    quantity: int = 1
    orientation: Orientation = Orientation.HORIZONTAL
    depth: float | None = None
    z_align: ZAlignment | None = None
    edge_banding: EdgeBanding | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Panel id must not be empty")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Panel dimensions must be positive")
        if self.quantity < 1:
            raise ValueError("Panel quantity must be at least 1")
        if self.depth is not None and self.depth <= 0:
            raise ValueError("Panel depth must be positive")

    @property
    def display_label(self) -> str:
        """Label shown in instructions, falling back to a short id."""
        return self.label or f"Panel {self.id[:4]}"


@dataclass(frozen=True)
class Settings:
    """Project-wide material and sheet settings.

    Attributes:
        thickness: Board thickness in mm.
        sheet_width: Stock sheet width in mm.
        sheet_height: Stock sheet height in mm.
        furniture_depth: Default panel depth in mm.
        units: Editor display units ("mm" or "inches"). Carried through
            unchanged; all computation and output is in millimetres.
        material_type: Sheet material.
        sheet_price: Price per sheet, 0 if unknown.
        currency: Currency symbol for cost output.
        edge_banding_price: Price per metre of edge banding.
        project_name: Optional project name.
    """

    thickness: float = 18.0
    sheet_width: float = 2440.0
    sheet_height: float = 1220.0
    furniture_depth: float = 400.0
    units: str = "mm"
    material_type: MaterialType = MaterialType.PLYWOOD
    sheet_price: float = 0.0
    currency: str = "$"
    edge_banding_price: float = 0.0
    project_name: str | None = None

    def __post_init__(self) -> None:
        if self.thickness <= 0:
            raise ValueError("Thickness must be positive")
        if self.sheet_width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.sheet_height <= 0:
            raise ValueError("Sheet height must be positive")
        if self.furniture_depth <= 0:
            raise ValueError("Furniture depth must be positive")
        if self.sheet_price < 0 or self.edge_banding_price < 0:
            raise ValueError("Prices must be non-negative")

    @property
    def sheet_area(self) -> float:
        """Area of one stock sheet in square mm."""
        return self.sheet_width * self.sheet_height


@dataclass(frozen=True)
class TrueDimensions:
    """Real-world extent of a panel along the X, Y and Z axes."""

    width: float
    height: float
    depth: float


@dataclass(frozen=True)
class CutDimensions:
    """Rectangle that has to be cut from a sheet for one panel.

    Attributes:
        length: First cut dimension.
        width: Second cut dimension.
    """

    length: float
    width: float

    def normalized(self) -> CutDimensions:
        """Return the same rectangle with length >= width."""
        if self.width > self.length:
            return CutDimensions(length=self.width, width=self.length)
        return self

    @property
    def area(self) -> float:
        """Area in square mm."""
        return self.length * self.width


@dataclass(frozen=True)
class PanelBounds:
    """Axis-aligned 3D bounding box of a panel."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float
    max_z: float
    orientation: Orientation = field(default=Orientation.HORIZONTAL)

    def overlaps_x(self, other: PanelBounds) -> bool:
        """True if the open X ranges intersect."""
        return self.min_x < other.max_x and self.max_x > other.min_x

    def overlaps_y(self, other: PanelBounds) -> bool:
        """True if the open Y ranges intersect."""
        return self.min_y < other.max_y and self.max_y > other.min_y
