import collections
import logging

import swaywsr.errors as errors
import swaywsr.types as types

_logger: logging.Logger = logging.getLogger(__name__)


def collect_windows(
    node: types.Node, windows: list[types.Node] | None = None
) -> list[types.Node]:
    """Depth first walk through a subtree and return all windows in traversal order.

    A window is a container (tiling or floating) which carries a name. The node
    itself comes first, then its tiling children, then its floating children.
    """

    if windows is None:
        windows = []

    if node.is_container() and node.name is not None:
        windows.append(node)

    for child in node.nodes:
        collect_windows(child, windows)
    for child in node.floating_nodes:
        collect_windows(child, windows)

    return windows


def _find_focused_workspace(
    parents: collections.deque[types.Node], node: types.Node
) -> types.Node | None:
    if node.focused:
        if node.type == types.NodeType.WORKSPACE:
            return node
        elif node.is_container():
            for parent in parents:
                if parent.type == types.NodeType.WORKSPACE:
                    return parent

    for child in [*node.nodes, *node.floating_nodes]:
        parents.appendleft(child)
        workspace = _find_focused_workspace(parents, child)
        if workspace is not None:
            return workspace
        parents.popleft()

    return None


def find_focused_workspace(root: types.Node) -> types.Node:
    """Return the workspace which currently holds the input focus.

    Focus either rests on the workspace itself or on a window, in which case the
    nearest enclosing workspace is returned.
    """

    workspace = _find_focused_workspace(collections.deque(), root)
    if workspace is None:
        raise errors.WorkspaceNotFoundError("Could not find a workspace with focus")
    _logger.debug(f"focused workspace: {workspace.name} ({workspace.id})")
    return workspace
