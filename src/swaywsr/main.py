import logging
import sys

import i3ipc
import pydantic

import swaywsr.config
import swaywsr.errors as errors
import swaywsr.label as label
import swaywsr.tree as tree
import swaywsr.types as types

_logger: logging.Logger = logging.getLogger(__name__)


def connect() -> i3ipc.Connection:
    """Open a new ipc connection to sway or i3."""

    try:
        return i3ipc.Connection()
    except Exception as e:
        raise errors.IpcConnectionError(
            f"could not connect to the ipc socket: {e}"
        ) from e


def quote(name: str) -> str:
    """Quote a workspace name as an argument of an ipc command."""

    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class Swaywsr:
    def __init__(
        self,
        config: types.SwaywsrConfig,
        connection: i3ipc.Connection | None = None,
    ) -> None:
        self._config: types.SwaywsrConfig = config
        if connection is None:
            try:
                connection = connect()
            except errors.IpcConnectionError as e:
                _logger.critical(f"{e} -> Exiting")
                sys.exit(1001)
        self.__i3ipc: i3ipc.Connection = connection

    def __execute_command(self, command: str) -> None:
        """Execute an i3ipc command and raise on error replies."""

        try:
            replies = self.__i3ipc.command(command)
        except (OSError, ValueError) as e:
            raise errors.IpcConnectionError(
                f"connection lost while executing {command}: {e}"
            ) from e

        if len(replies) == 0:
            raise errors.RenameCommandError(
                f"no reply while executing ipc command {command}"
            )
        for reply in replies:
            if not reply.success:
                raise errors.RenameCommandError(
                    f"error while executing ipc command {command}: {reply.error}"
                )

    def __get_current_tree(self) -> types.Node:
        """Fetch a fresh snapshot of the window tree."""

        try:
            con: i3ipc.Con = self.__i3ipc.get_tree()
        except (OSError, ValueError, KeyError) as e:
            raise errors.TreeFetchError(f"could not fetch the tree: {e}") from e

        try:
            return types.Node.from_ipc_data(con.ipc_data)
        except pydantic.ValidationError as e:
            raise errors.TreeFetchError(f"could not parse the tree: {e}") from e

    def __resolve_icons(self, windows: list[types.Node]) -> list[str]:
        """Map the windows to their icons, dropping windows without one."""

        icons: list[str] = []
        for window in windows:
            icon = swaywsr.config.fetch_icon(self._config, window)
            if len(icon) == 0:
                continue
            if self._config.remove_duplicates and icon in icons:
                continue
            icons.append(icon)
        return icons

    def compute_label(self, workspace: types.Node) -> str:
        """Compute the label a workspace should carry."""

        if workspace.name is None:
            raise errors.MissingAttributeError(
                f"Could not get name for workspace with id: {workspace.id}"
            )
        index: int | None = workspace.index
        if index is None:
            raise errors.MissingAttributeError(
                f"Could not fetch index for: {workspace.name}"
            )

        windows: list[types.Node] = tree.collect_windows(workspace)
        return label.synthesize_label(index, self.__resolve_icons(windows))

    def update_workspace_name(self, workspace: types.Node) -> str | None:
        """Rename the workspace if its label is outdated, return the new name or None."""

        new_name: str = self.compute_label(workspace)
        name: str = workspace.name  # type: ignore
        if name == new_name:
            _logger.debug(f"workspace {name} is up to date")
            return None

        command = f"rename workspace {quote(name)} to {quote(new_name)}"
        _logger.debug(command)
        self.__execute_command(command)
        return new_name

    def update_workspace(self) -> str | None:
        """Run one update cycle for the focused workspace."""

        current_tree: types.Node = self.__get_current_tree()
        workspace: types.Node = tree.find_focused_workspace(current_tree)
        return self.update_workspace_name(workspace)

    def handle_event(
        self,
        connection: i3ipc.Connection,
        event: i3ipc.WorkspaceEvent | i3ipc.WindowEvent,
    ) -> None:
        """Event callback, the payload is not inspected."""

        try:
            self.update_workspace()
        except errors.SwaywsrError as e:
            _logger.error(f"Could not update workspace name: {e}")

    def run(self) -> None:
        """Subscribe to workspace and window events until the stream ends."""

        try:
            events: i3ipc.Connection = connect()
        except errors.IpcConnectionError as e:
            _logger.critical(f"{e} -> Exiting")
            sys.exit(1001)

        events.on(i3ipc.Event.WORKSPACE, self.handle_event)
        events.on(i3ipc.Event.WINDOW, self.handle_event)
        _logger.info("listening for workspace and window events")
        try:
            events.main()
        except Exception as e:
            _logger.critical(f"event subscription broke: {e} -> Exiting")
            sys.exit(1003)

        _logger.critical("event subscription ended -> Exiting")
        sys.exit(1003)
