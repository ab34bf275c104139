"""Location tracking for the recursive property validator.

An ItemStack is an immutable chain of frames from the document root to
the item currently being validated. Pushing returns a new stack, so a
recursive call can never disturb its caller's view of the path.
"""

from dataclasses import dataclass
from typing import Any

from syncgate.core.types import MISSING, is_value_null_or_missing


@dataclass(frozen=True)
class ItemFrame:
    """One level of the document tree.

    Attributes:
        item_name: Property name, "[index]" / "[key]" for array and
            hashtable elements, or None for the document root
        item_value: The value in the new document (MISSING if absent)
        old_item_value: The value in the old document (MISSING if absent)
    """

    item_name: str | None
    item_value: Any
    old_item_value: Any = MISSING


def build_item_path(frames: tuple[ItemFrame, ...] | list[ItemFrame]) -> str:
    """Construct the fully qualified path of the last frame.

    e.g. ("objectProp", "arrayProp", "[2]", "key") -> "objectProp.arrayProp[2].key"
    """
    components: list[str] = []
    for frame in frames:
        name = frame.item_name
        if not name:
            continue
        if not components or name.startswith("["):
            components.append(name)
        else:
            components.append("." + name)
    return "".join(components)


@dataclass(frozen=True)
class ItemStack:
    frames: tuple[ItemFrame, ...]

    @classmethod
    def root(cls, doc: dict[str, Any], old_doc: dict[str, Any] | None) -> "ItemStack":
        return cls((ItemFrame(None, doc, MISSING if old_doc is None else old_doc),))

    def push(self, item_name: str, item_value: Any, old_item_value: Any) -> "ItemStack":
        return ItemStack(self.frames + (ItemFrame(item_name, item_value, old_item_value),))

    @property
    def current(self) -> ItemFrame:
        return self.frames[-1]

    @property
    def parent(self) -> ItemFrame | None:
        return self.frames[-2] if len(self.frames) >= 2 else None

    @property
    def ancestors(self) -> tuple[ItemFrame, ...]:
        """All frames except the current one; the parent is last."""
        return self.frames[:-1]

    @property
    def is_root(self) -> bool:
        return len(self.frames) == 1

    @property
    def path(self) -> str:
        return build_item_path(self.frames)

    def child_path(self, name: str) -> str:
        """Path of a named child of the current item."""
        path = self.path
        return f"{path}.{name}" if path else name

    def parent_existed(self) -> bool:
        """Whether the current item's parent had a value in the old document."""
        parent = self.parent
        return parent is not None and not is_value_null_or_missing(parent.old_item_value)
