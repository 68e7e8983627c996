import enum

import pydantic

DEFAULT_ICONS: dict[str, str] = {
    "alacritty": "🖥",
    "chromium": "🌐",
    "code": "📝",
    "firefox": "🦊",
    "foot": "🖥",
    "gimp": "🎨",
    "google-chrome": "🌐",
    "kitty": "🖥",
    "mpv": "🎬",
    "org.pwmt.zathura": "📄",
    "org.telegram.desktop": "💬",
    "pavucontrol": "🔊",
    "signal": "💬",
    "slack": "💬",
    "spotify": "🎵",
    "thunar": "📁",
    "thunderbird": "📧",
}


class SwaywsrConfig(pydantic.BaseModel):
    """Configuration of the tool."""

    version: int = 1
    icons: dict[str, str] = DEFAULT_ICONS
    title_icons: dict[str, str] = {}
    default_icon: str = ""
    remove_duplicates: bool = False
    check_names_first: bool = False


class NodeType(str, enum.Enum):
    """Type of a node in the compositor tree."""

    ROOT = "root"
    OUTPUT = "output"
    WORKSPACE = "workspace"
    CON = "con"
    FLOATING_CON = "floating_con"
    DOCKAREA = "dockarea"
    OTHER = "other"


class WindowProperties(pydantic.BaseModel):
    """X11 properties of a window (XWayland or i3)."""

    model_config = pydantic.ConfigDict(populate_by_name=True)

    class_: str | None = pydantic.Field(default=None, alias="class")
    instance: str | None = None
    title: str | None = None


class Node(pydantic.BaseModel):
    """A node of a tree snapshot as returned by get_tree."""

    id: int
    type: NodeType = NodeType.OTHER
    name: str | None = None
    num: int | None = None
    focused: bool = False
    nodes: list["Node"] = []
    floating_nodes: list["Node"] = []
    app_id: str | None = None
    pid: int | None = None
    window_properties: WindowProperties | None = None

    @pydantic.field_validator("type", mode="before")
    @classmethod
    def _unknown_type_is_other(cls, value):
        if isinstance(value, str) and value not in NodeType._value2member_map_:
            return NodeType.OTHER
        return value

    @classmethod
    def from_ipc_data(cls, ipc_data: dict) -> "Node":
        """Create a snapshot from the raw json of an ipc tree reply."""

        return cls.model_validate(ipc_data)

    @property
    def index(self) -> int | None:
        """Workspace number, None for named workspaces (num -1) or other nodes."""

        if self.num is None or self.num < 0:
            return None
        return self.num

    def is_container(self) -> bool:
        return self.type in (NodeType.CON, NodeType.FLOATING_CON)
