"""
main.py — Algorithm Trace Visualizer Flask App
===============================================
JSON API over the trace generators and the playback engine.  Any
renderer (browser canvas, notebook, terminal) polls /api/state and
paints the step it gets back.

Routes:
  GET  /api/algorithms          – registered algorithms by family (?tag= filters)
  POST /api/sort/run            – generate + load a sorting trace
  POST /api/search/run          – generate + load a searching trace
  POST /api/array/run           – sieve {limit}, or two / three sum {input, target}
  POST /api/tree/run            – BST insert / search / traversal over {input}
  POST /api/graph/run           – generate + load a graph trace
  POST /api/graph/generate      – random graph (stored for the next run)
  POST /api/compare/run         – two sorting traces under one cursor
  POST /api/playback/<action>   – play / pause / toggle / next / prev / reset / end
  POST /api/playback/speed      – {speed_ms} or {preset}
  POST /api/playback/goto       – {index}
  GET  /api/state               – cursor, state and current step(s)
  GET  /api/history             – operation history lines

State management:
  Playback objects are not serialisable, so the Flask session only holds
  an id; the objects live in a SessionStore on the app, which evicts the
  least recently used session past SESSION_LIMIT.  Each session holds:
    • scheduler  – MonotonicScheduler, polled at the top of each request
    • player     – PlaybackEngine or ComparisonController
    • history    – OperationHistory fed by the player's on_step
    • graph      – last graph run or generated

  Flask serves requests on several threads.  Every route works on its
  session inside `with open_playback() as ps:`, which holds the
  session's lock across the poll, the action and the response payload.
"""

import logging
import secrets
import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from flask import Flask, current_app, jsonify, request, session

import settings
from graph import Graph, GraphError
from algorithms import (
    FAMILIES,
    ArrayAlgorithm,
    GraphAlgorithm,
    SearchAlgorithm,
    SortAlgorithm,
    TreeAlgorithm,
    algorithms_by_tag,
    generate_array_trace,
    generate_graph_trace,
    generate_search_trace,
    generate_sort_trace,
    generate_tree_trace,
    list_algorithms,
)
from algorithms.parsing import parse_number, parse_numbers
from algorithms.step import step_to_dict
from engine import (
    ComparisonController,
    MonotonicScheduler,
    NoTraceLoaded,
    OperationHistory,
    PlaybackEngine,
    PlaybackState,
    trace_metrics,
)


logger = logging.getLogger(__name__)

SESSIONS_KEY = "algoviz_sessions"


class ApiError(Exception):
    """Rejected request; rendered as {"error", "reason"} with `status`."""

    def __init__(self, message: str, reason: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.reason  = reason
        self.status  = status


# ---------------------------------------------------------------------------
# Per-client playback session
# ---------------------------------------------------------------------------
class PlaybackSession:
    """
    One client's scheduler, player and history.  Nothing here is
    thread-safe on its own: callers hold `lock` (see `active()`).
    """

    def __init__(self, scheduler, speed_ms: float, history_limit: int):
        self.lock      = threading.Lock()
        self.scheduler = scheduler
        self.history   = OperationHistory(limit=history_limit)
        self.speed_ms  = speed_ms
        self.graph:  Optional[Graph] = None
        self.player: Optional[PlaybackEngine] = None
        self.metrics: Dict[str, Any] = {}

    @contextmanager
    def active(self) -> Iterator["PlaybackSession"]:
        """Hold the session: fire due ticks, then let the caller act."""
        with self.lock:
            self.poll()
            yield self

    def close(self) -> None:
        with self.lock:
            if self.player is not None:
                self.player.close()
                self.player = None

    def install(self, player: PlaybackEngine) -> PlaybackEngine:
        """Swap in a new player, tearing the old one down first."""
        if self.player is not None:
            self.speed_ms = self.player.speed_ms
            self.player.close()
        self.history.clear()
        player.set_speed(self.speed_ms)
        player.on_step = self.history.recorder(player)
        self.player = player
        return player

    def poll(self) -> None:
        poll = getattr(self.scheduler, "poll", None)
        if poll is not None:
            poll()

    def require_player(self) -> PlaybackEngine:
        if self.player is None or not self.player.loaded:
            raise NoTraceLoaded("No trace loaded")
        return self.player


class SessionStore:
    """
    PlaybackSessions by id, least recently used first.  Past `limit`
    sessions the oldest is dropped and its player closed.
    """

    def __init__(self, factory: Callable[[], PlaybackSession], limit: int):
        self._factory = factory
        self._limit = max(1, limit)
        self._sessions: "OrderedDict[str, PlaybackSession]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sid: Optional[str]) -> Optional[PlaybackSession]:
        with self._lock:
            ps = self._sessions.get(sid)
            if ps is not None:
                self._sessions.move_to_end(sid)
            return ps

    def create(self) -> Tuple[str, PlaybackSession]:
        sid = secrets.token_hex(16)
        ps = self._factory()
        with self._lock:
            self._sessions[sid] = ps
            evicted = []
            while len(self._sessions) > self._limit:
                evicted.append(self._sessions.popitem(last=False))
        # closed outside the store lock; a request may still hold one
        for old_sid, old in evicted:
            old.close()
            logger.debug("Evicted playback session %s", old_sid)
        return sid, ps

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def get_playback() -> PlaybackSession:
    """Session object for the current client, created on first use."""
    store: SessionStore = current_app.extensions[SESSIONS_KEY]
    ps = store.get(session.get("sid"))
    if ps is None:
        sid, ps = store.create()
        session["sid"] = sid
        logger.debug("New playback session %s", sid)
    return ps


@contextmanager
def open_playback() -> Iterator[PlaybackSession]:
    """The current client's session, locked and polled for this request."""
    with get_playback().active() as ps:
        yield ps


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def payload() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def parse_enum(enum_cls, key: Any):
    try:
        return enum_cls(key)
    except ValueError:
        raise ApiError(f"Unknown algorithm: {key}", "unknown_algorithm")


def parse_values(raw: Any):
    """Accepts "5, 3 8" or [5, 3, 8]; bad tokens are dropped."""
    if isinstance(raw, (list, tuple)):
        raw = " ".join(str(v) for v in raw if not isinstance(v, bool))
    return parse_numbers(raw if isinstance(raw, str) else "")


def parse_target(data: Dict[str, Any]):
    target = parse_number(str(data.get("target", "")))
    if target is None:
        raise ApiError("Please enter a number to search for", "invalid_target")
    return target


def state_payload(ps: PlaybackSession) -> Dict[str, Any]:
    player = ps.player
    if player is None or not player.loaded:
        return {"loaded": False, "state": PlaybackState.IDLE.value}

    data: Dict[str, Any] = {
        "loaded":      True,
        "state":       player.state.value,
        "cursor":      player.cursor,
        "total_steps": player.length,
        "speed_ms":    player.speed_ms,
        "generation":  player.generation,
        "metrics":     ps.metrics,
    }
    if isinstance(player, ComparisonController):
        left, right = player.current_step
        data.update({
            "mode":       "compare",
            "algorithms": [player.left.algorithm, player.right.algorithm],
            "indices":    list(player.indices),
            "steps":      [step_to_dict(left), step_to_dict(right)],
        })
    else:
        data.update({
            "mode":      "single",
            "algorithm": player.trace.algorithm,
            "step":      step_to_dict(player.current_step),
        })
    return data


def load_single(ps: PlaybackSession, trace, graph: Optional[Graph] = None):
    player = ps.install(PlaybackEngine(ps.scheduler))
    player.load_trace(trace)
    ps.metrics = trace_metrics(trace, graph=graph).to_dict()
    logger.info("Loaded %s trace (%d steps)", trace.algorithm, len(trace))
    return jsonify(state_payload(ps))


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[Dict[str, Any]] = None,
               scheduler_factory: Callable[[], Any] = MonotonicScheduler) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(settings.flask_config())
    app.config["SCHEDULER_FACTORY"] = scheduler_factory
    if config:
        app.config.from_mapping(config)

    def new_session() -> PlaybackSession:
        return PlaybackSession(
            app.config["SCHEDULER_FACTORY"](),
            speed_ms=app.config["DEFAULT_SPEED_MS"],
            history_limit=app.config["HISTORY_LIMIT"],
        )

    app.extensions[SESSIONS_KEY] = SessionStore(new_session, app.config["SESSION_LIMIT"])

    # -----------------------------------------------------------------------
    # Errors
    # -----------------------------------------------------------------------
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        logger.info("Rejected request: %s (%s)", err.message, err.reason)
        return jsonify({"error": err.message, "reason": err.reason}), err.status

    @app.errorhandler(GraphError)
    def handle_graph_error(err: GraphError):
        logger.info("Rejected graph: %s", err)
        return jsonify({"error": str(err), "reason": "invalid_graph"}), 400

    @app.errorhandler(NoTraceLoaded)
    def handle_no_trace(err: NoTraceLoaded):
        return jsonify({"error": str(err), "reason": "no_trace"}), 409

    # -----------------------------------------------------------------------
    # API: Catalogue
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        def card(a):
            return {
                "key":               a.key,
                "label":             a.label,
                "pseudocode":        a.pseudocode,
                "tags":              a.tags,
                "complexity_time":   a.complexity_time,
                "complexity_space":  a.complexity_space,
                "description":       a.description,
                "requires_weighted": a.requires_weighted,
                "requires_directed": a.requires_directed,
                "needs_source":      a.needs_source,
            }
        tag = request.args.get("tag")
        cards = algorithms_by_tag(tag) if tag else list_algorithms()
        return jsonify({
            family: [card(a) for a in cards if a.family == family]
            for family in FAMILIES.values()
        })

    # -----------------------------------------------------------------------
    # API: Runs
    # -----------------------------------------------------------------------
    @app.route("/api/sort/run", methods=["POST"])
    def api_sort_run():
        data = payload()
        algorithm = parse_enum(SortAlgorithm, data.get("algorithm"))
        values = parse_values(data.get("input", ""))
        with open_playback() as ps:
            return load_single(ps, generate_sort_trace(algorithm, values))

    @app.route("/api/search/run", methods=["POST"])
    def api_search_run():
        data = payload()
        algorithm = parse_enum(SearchAlgorithm, data.get("algorithm"))
        values = parse_values(data.get("input", ""))
        target = parse_target(data)
        with open_playback() as ps:
            return load_single(ps, generate_search_trace(algorithm, values, target))

    @app.route("/api/array/run", methods=["POST"])
    def api_array_run():
        data = payload()
        algorithm = parse_enum(ArrayAlgorithm, data.get("algorithm"))
        if algorithm is ArrayAlgorithm.SIEVE:
            try:
                limit = int(data.get("limit"))
            except (TypeError, ValueError):
                limit = 0
            if not 2 <= limit <= app.config["SIEVE_LIMIT"]:
                raise ApiError(f"Please enter a number between 2 and {app.config['SIEVE_LIMIT']}",
                               "invalid_limit")
            trace = generate_array_trace(algorithm, limit=limit)
        else:
            values = parse_values(data.get("input", ""))
            trace = generate_array_trace(algorithm, values, parse_target(data))
        with open_playback() as ps:
            return load_single(ps, trace)

    @app.route("/api/tree/run", methods=["POST"])
    def api_tree_run():
        data = payload()
        algorithm = parse_enum(TreeAlgorithm, data.get("algorithm"))
        values = parse_values(data.get("input", ""))
        target = parse_target(data) if algorithm is TreeAlgorithm.SEARCH else None
        with open_playback() as ps:
            return load_single(ps, generate_tree_trace(algorithm, values, target))

    @app.route("/api/graph/run", methods=["POST"])
    def api_graph_run():
        data = payload()
        algorithm = parse_enum(GraphAlgorithm, data.get("algorithm"))
        with open_playback() as ps:
            if data.get("graph") is not None:
                graph = Graph.from_dict(data["graph"])
            elif ps.graph is not None:
                graph = ps.graph
            else:
                raise ApiError("Build or generate a graph first", "no_graph")
            ps.graph = graph

            result = generate_graph_trace(algorithm, graph, data.get("source"), data.get("target"))
            if not result.ok:
                raise ApiError(result.failure.message, result.failure.reason.value)
            return load_single(ps, result.trace, graph=graph)

    @app.route("/api/graph/generate", methods=["POST"])
    def api_graph_generate():
        data = payload()
        g = Graph.generate_random(
            directed=bool(data.get("directed", False)),
            weighted=bool(data.get("weighted", False)),
            node_range=tuple(app.config["RANDOM_GRAPH_NODES"]),
            weight_range=tuple(app.config["RANDOM_WEIGHT_RANGE"]),
            seed=data.get("seed"),
        )
        with open_playback() as ps:
            ps.graph = g
        logger.debug("Generated %r", g)
        return jsonify(g.to_dict())

    @app.route("/api/compare/run", methods=["POST"])
    def api_compare_run():
        data = payload()
        left  = parse_enum(SortAlgorithm, data.get("left"))
        right = parse_enum(SortAlgorithm, data.get("right"))
        values = parse_values(data.get("input", ""))

        with open_playback() as ps:
            ctl = ps.install(ComparisonController(ps.scheduler))
            ctl.load_traces(generate_sort_trace(left, values), generate_sort_trace(right, values))
            ps.metrics = ctl.comparison_result().to_dict()
            logger.info("Comparing %s with %s on %d values", left.value, right.value, len(values))
            return jsonify(state_payload(ps))

    # -----------------------------------------------------------------------
    # API: Playback
    # -----------------------------------------------------------------------
    actions = {
        "play":   lambda p: p.play(),
        "pause":  lambda p: p.pause(),
        "toggle": lambda p: p.toggle_play(),
        "next":   lambda p: p.step_forward(),
        "prev":   lambda p: p.step_backward(),
        "reset":  lambda p: p.reset(),
        "end":    lambda p: p.jump_to_end(),
    }

    @app.route("/api/playback/speed", methods=["POST"])
    def api_playback_speed():
        data = payload()
        with open_playback() as ps:
            player = ps.require_player()
            if "preset" in data:
                if data["preset"] not in app.config["SPEED_PRESETS"]:
                    raise ApiError(f"Unknown speed preset: {data['preset']}", "invalid_speed")
                player.set_speed(app.config["SPEED_PRESETS"][data["preset"]])
            else:
                try:
                    player.set_speed(float(data.get("speed_ms")))
                except (TypeError, ValueError):
                    raise ApiError("speed_ms must be a number", "invalid_speed")
            return jsonify(state_payload(ps))

    @app.route("/api/playback/goto", methods=["POST"])
    def api_playback_goto():
        data = payload()
        with open_playback() as ps:
            player = ps.require_player()
            try:
                index = int(data.get("index"))
            except (TypeError, ValueError):
                raise ApiError("Invalid step index", "invalid_index")
            player.goto_step(index)
            return jsonify(state_payload(ps))

    @app.route("/api/playback/<action>", methods=["POST"])
    def api_playback(action: str):
        if action not in actions:
            raise ApiError(f"Unknown playback action: {action}", "unknown_action", status=404)
        with open_playback() as ps:
            actions[action](ps.require_player())
            return jsonify(state_payload(ps))

    # -----------------------------------------------------------------------
    # API: Polling
    # -----------------------------------------------------------------------
    @app.route("/api/state")
    def api_state():
        with open_playback() as ps:
            return jsonify(state_payload(ps))

    @app.route("/api/history")
    def api_history():
        with open_playback() as ps:
            return jsonify({"entries": ps.history.entries, "lines": ps.history.lines()})

    return app


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    settings.configure_logging()
    logger.info("Algorithm Trace Visualizer listening on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
