"""Flask application factory for the WebOS web UI.

The ``create_app`` function starts a desktop and returns a Flask app
whose JSON endpoints drive it.  The browser page renders windows from
``GET /api/windows`` and forwards every user action back:

- ``GET /`` — the desktop page.
- ``GET /api/windows`` / ``POST /api/windows`` — list or launch windows.
- ``POST /api/windows/<id>/<action>`` — focus, minimize, maximize,
  restore, or close a window.
- ``POST /api/desktop/show`` — minimize everything.
- ``POST /api/pointer/<down|move|up>`` — title-bar drag events.
- ``POST /api/windows/<id>/terminal`` — run a terminal command.
- ``GET|PUT /api/windows/<id>/editor`` — read or save an editor.
- ``GET|POST /api/windows/<id>/explorer`` — browse a File Explorer.
- ``GET /api/fs/<id>`` / ``PUT /api/fs/<id>`` — read a node, save a file.
- ``GET /api/log`` — the desktop event log.

Unknown window or node ids answer 404; malformed bodies answer 400.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeAlias

from flask import Flask, Response, jsonify, render_template, request

from py_webos.apps import EditorSession, ExplorerSession
from py_webos.config import load_config
from py_webos.desktop import Desktop
from py_webos.vfs.seed import QUICK_ACCESS
from py_webos.windows.catalog import AppId

if TYPE_CHECKING:
    from pathlib import Path

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404
_HTTP_CREATED = 201

_Reply: TypeAlias = Response | tuple[Response, int]


def _error(message: str, status: int) -> tuple[Response, int]:
    return jsonify({"error": message}), status


def _json_body() -> dict[str, Any] | None:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _desktop_state(desktop: Desktop) -> dict[str, Any]:
    return {
        "windows": [w.to_dict() for w in desktop.windows.windows],
        "active_id": desktop.windows.active_id,
        "taskbar": [
            {
                "app_id": str(b.app_id),
                "icon": str(b.icon),
                "running": b.running,
                "minimized": b.minimized,
            }
            for b in desktop.taskbar()
        ],
    }


def _editor_state(editor: EditorSession) -> dict[str, Any]:
    return {
        "file_id": editor.file_id,
        "mode": str(editor.mode),
        "content": editor.content,
        "dirty": editor.dirty,
        "caption": editor.caption(),
        "status": editor.status(),
    }


def _explorer_state(desktop: Desktop, explorer: ExplorerSession) -> dict[str, Any]:
    return {
        "path_ids": explorer.path_ids,
        "breadcrumbs": explorer.breadcrumbs(),
        "items": [{"id": i.id, "name": i.name, "kind": str(i.kind)} for i in explorer.items()],
        "item_count": explorer.item_count,
        "quick_access": [
            {"label": label, "id": folder_id}
            for label, folder_id in QUICK_ACCESS
            if desktop.vfs.exists(folder_id)
        ],
    }


def create_app(*, config_path: Path | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Optional JSON desktop configuration.

    Returns:
        A configured Flask application ready to serve.

    """
    desktop = Desktop(config=load_config(config_path))
    app = Flask(__name__)
    app.config["DESKTOP"] = desktop

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the desktop page."""
        return render_template("index.html", pinned=desktop.taskbar())

    @app.route("/api/windows", methods=["GET"])
    def list_windows() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return every window, the focused id, and the taskbar."""
        return jsonify(_desktop_state(desktop))

    @app.route("/api/windows", methods=["POST"])
    def launch() -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Launch an application.

        Expects JSON body: ``{"app_id": "...", "file_id": "..."?}``
        """
        data = _json_body()
        if data is None or "app_id" not in data:
            return _error("Missing 'app_id' field", _HTTP_BAD_REQUEST)
        try:
            app_id = AppId(data["app_id"])
        except ValueError:
            return _error(f"Unknown application: {data['app_id']}", _HTTP_BAD_REQUEST)
        file_id = data.get("file_id")
        if file_id is not None and not isinstance(file_id, str):
            return _error("'file_id' must be a string", _HTTP_BAD_REQUEST)
        record = desktop.launch(app_id, file_id)
        return jsonify(record.to_dict()), _HTTP_CREATED

    @app.route("/api/windows/<window_id>/<action>", methods=["POST"])
    def window_action(window_id: str, action: str) -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Apply a title-bar or taskbar action to a window."""
        if action == "close":
            if not desktop.close(window_id):
                return _error(f"No such window: {window_id}", _HTTP_NOT_FOUND)
            return jsonify(_desktop_state(desktop))

        handlers = {
            "focus": desktop.focus,
            "minimize": desktop.minimize,
            "maximize": desktop.toggle_maximize,
            "restore": desktop.restore,
        }
        handler = handlers.get(action)
        if handler is None:
            return _error(f"Unknown action: {action}", _HTTP_NOT_FOUND)
        if handler(window_id) is None:
            return _error(f"No such window: {window_id}", _HTTP_NOT_FOUND)
        return jsonify(_desktop_state(desktop))

    @app.route("/api/desktop/show", methods=["POST"])
    def show_desktop() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Minimize every window."""
        desktop.show_desktop()
        return jsonify(_desktop_state(desktop))

    @app.route("/api/pointer/<event>", methods=["POST"])
    def pointer(event: str) -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Forward a pointer event to the drag controller.

        ``down`` expects ``{"window_id", "x", "y"}``; ``move`` expects
        ``{"x", "y"}``; ``up`` takes no body.
        """
        if event == "up":
            desktop.pointer_up()
            return jsonify({"dragging": False})

        data = _json_body()
        if data is None or not all(isinstance(data.get(k), int) for k in ("x", "y")):
            return _error("Expected integer 'x' and 'y'", _HTTP_BAD_REQUEST)
        if event == "down":
            window_id = data.get("window_id")
            if not isinstance(window_id, str):
                return _error("Missing 'window_id' field", _HTTP_BAD_REQUEST)
            session = desktop.press_title(window_id, data["x"], data["y"])
            return jsonify({"dragging": session is not None})
        if event == "move":
            record = desktop.pointer_move(data["x"], data["y"])
            return jsonify({"window": record.to_dict() if record is not None else None})
        return _error(f"Unknown pointer event: {event}", _HTTP_NOT_FOUND)

    @app.route("/api/windows/<window_id>/terminal", methods=["POST"])
    def terminal(window_id: str) -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Run a command in a terminal window.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with the response ``lines``, the full ``output`` log,
            and the next ``prompt``.

        """
        term = desktop.terminal(window_id)
        if term is None:
            return _error(f"No terminal window: {window_id}", _HTTP_NOT_FOUND)
        data = _json_body()
        if data is None or not isinstance(data.get("command"), str):
            return _error("Missing 'command' field", _HTTP_BAD_REQUEST)
        lines = term.execute(data["command"])
        return jsonify({"lines": lines, "output": term.output, "prompt": term.prompt()})

    @app.route("/api/windows/<window_id>/editor", methods=["GET"])
    def read_editor(window_id: str) -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Return the buffer and status of an editor window."""
        editor = desktop.editor(window_id)
        if editor is None:
            return _error(f"No editor window: {window_id}", _HTTP_NOT_FOUND)
        return jsonify(_editor_state(editor))

    @app.route("/api/windows/<window_id>/editor", methods=["PUT"])
    def save_editor(window_id: str) -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Save an editor window.

        Expects JSON body: ``{"content": "..."}``
        """
        editor = desktop.editor(window_id)
        if editor is None:
            return _error(f"No editor window: {window_id}", _HTTP_NOT_FOUND)
        data = _json_body()
        if data is None or not isinstance(data.get("content"), str):
            return _error("Missing 'content' field", _HTTP_BAD_REQUEST)
        saved = desktop.save_editor(window_id, data["content"])
        return jsonify({**_editor_state(editor), "saved": saved})

    @app.route("/api/windows/<window_id>/explorer", methods=["GET"])
    def read_explorer(window_id: str) -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Return the folder shown by a File Explorer window."""
        explorer = desktop.explorer(window_id)
        if explorer is None:
            return _error(f"No explorer window: {window_id}", _HTTP_NOT_FOUND)
        return jsonify(_explorer_state(desktop, explorer))

    @app.route("/api/windows/<window_id>/explorer", methods=["POST"])
    def explorer_action(window_id: str) -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Navigate a File Explorer window.

        Expects JSON body ``{"action": ...}`` with one of:

        - ``"activate"`` and ``"node_id"``: double-click an entry.
        - ``"up"``: go to the parent folder.
        - ``"crumb"`` and ``"index"``: jump to a breadcrumb.
        - ``"location"`` and ``"node_id"``: open a quick-access folder.

        The reply carries the explorer state and ``opened``, the editor
        window launched for a file (or null).
        """
        explorer = desktop.explorer(window_id)
        if explorer is None:
            return _error(f"No explorer window: {window_id}", _HTTP_NOT_FOUND)
        data = _json_body()
        if data is None:
            return _error("Missing JSON body", _HTTP_BAD_REQUEST)

        action = data.get("action")
        node_id = data.get("node_id")
        index = data.get("index")
        opened = None
        if action == "up":
            explorer.navigate_up()
        elif action == "crumb":
            if isinstance(index, bool) or not isinstance(index, int):
                return _error("Expected integer 'index'", _HTTP_BAD_REQUEST)
            explorer.navigate_to_crumb(index)
        elif action in ("activate", "location"):
            if not isinstance(node_id, str):
                return _error("Missing 'node_id' field", _HTTP_BAD_REQUEST)
            if action == "activate":
                opened = desktop.explorer_activate(window_id, node_id)
            else:
                explorer.open_location(node_id)
        else:
            return _error(f"Unknown explorer action: {action}", _HTTP_BAD_REQUEST)

        state = _explorer_state(desktop, explorer)
        state["opened"] = opened.to_dict() if opened is not None else None
        return jsonify(state)

    @app.route("/api/fs/<node_id>", methods=["GET"])
    def read_node(node_id: str) -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Return a node and, for folders, its children."""
        node = desktop.vfs.get(node_id)
        if node is None:
            return _error(f"No such node: {node_id}", _HTTP_NOT_FOUND)
        payload = desktop.vfs.snapshot()[node_id]
        if node.is_folder:
            payload["entries"] = [
                {"id": c.id, "name": c.name, "kind": str(c.kind)}
                for c in desktop.vfs.list_children(node_id)
            ]
        return jsonify(payload)

    @app.route("/api/fs/<node_id>", methods=["PUT"])
    def save_node(node_id: str) -> _Reply:  # pyright: ignore[reportUnusedFunction]
        """Save new content into a file.

        Expects JSON body: ``{"content": "..."}``
        """
        data = _json_body()
        if data is None or not isinstance(data.get("content"), str):
            return _error("Missing 'content' field", _HTTP_BAD_REQUEST)
        if not desktop.save_file(node_id, data["content"]):
            return _error(f"No such file: {node_id}", _HTTP_NOT_FOUND)
        return jsonify({"id": node_id, "saved": True})

    @app.route("/api/log")
    def event_log() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the desktop event log."""
        return jsonify({"entries": desktop.dmesg()})

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``py-webos-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
