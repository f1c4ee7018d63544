"""
Web application module for the Courtside rotation manager.

This module contains the Flask server exposing the rotation services as a
JSON API: roster and game management, live lineups, substitutions,
recommendations and full-game optimization.
"""
import logging
import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from ..services import (
    GameNotFoundError, PlayerNotFoundError, RotationError, RotationStrategy, ServiceFactory
)

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Builds every service from one ServiceFactory so they share a store.
    """

    def __init__(self, service_factory: ServiceFactory):
        self.service_factory = service_factory

        services = service_factory.create_complete_service_suite()
        self.persistence_service = services['persistence']
        self.player_service = services['players']
        self.game_service = services['games']
        self.stats_service = services['stats']
        self.rotation_service = services['rotations']
        self.substitution_service = services['substitutions']
        self.manual_override_service = services['manual']
        self.optimizer = services['optimizer']


def _error(e: Exception) -> Tuple[Any, int]:
    """JSON error response; missing games and players are 404, the rest 400."""
    status = 404 if isinstance(e, (GameNotFoundError, PlayerNotFoundError)) else 400
    return jsonify({"success": False, "error": str(e)}), status


def _payload() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def create_app(
    data_file: Optional[str] = None,
    service_factory: Optional[ServiceFactory] = None,
) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        data_file: Optional JSON file backing the store
        service_factory: Factory to build services from; overrides data_file

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app_state = WebAppState(service_factory or ServiceFactory(data_file=data_file))
    app.config["APP_STATE"] = app_state

    # ==================== Players ==================== #

    @app.route("/api/players", methods=["GET"])
    def get_players():
        players = app_state.player_service.list_players()
        return jsonify({"success": True, "players": [p.to_dict() for p in players]})

    @app.route("/api/players", methods=["POST"])
    def create_player():
        """Create a new player."""
        try:
            data = _payload()
            player = app_state.player_service.create_player(
                data.get("name", ""), str(data.get("number", ""))
            )
            return jsonify({"success": True, "player": player.to_dict()}), 201
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/players/<player_id>", methods=["PUT"])
    def update_player(player_id: str):
        try:
            data = _payload()
            number = data.get("number")
            player = app_state.player_service.update_player(
                player_id,
                name=data.get("name"),
                number=str(number) if number is not None else None,
            )
            return jsonify({"success": True, "player": player.to_dict()})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/players/<player_id>", methods=["DELETE"])
    def delete_player(player_id: str):
        try:
            app_state.player_service.delete_player(player_id)
            return jsonify({"success": True, "message": f"Player {player_id} deleted"})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/players/<player_id>/stats", methods=["GET"])
    def get_player_season_stats(player_id: str):
        """Season totals for one player."""
        try:
            stats = app_state.stats_service.get_player_season_stats(player_id)
            return jsonify({"success": True, "stats": stats.to_dict()})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/stats", methods=["GET"])
    def get_season_stats():
        stats = app_state.stats_service.get_all_player_season_stats()
        return jsonify({"success": True, "stats": [s.to_dict() for s in stats]})

    # ==================== Games ==================== #

    @app.route("/api/games", methods=["GET"])
    def get_games():
        games = app_state.game_service.list_games()
        return jsonify({"success": True, "games": [g.to_dict() for g in games]})

    @app.route("/api/games", methods=["POST"])
    def create_game():
        """Schedule a new game."""
        try:
            data = _payload()
            opponent = (data.get("opponent") or "").strip()
            if not opponent:
                return jsonify({"success": False, "error": "Opponent is required"}), 400
            game = app_state.game_service.create_game(
                opponent, data.get("date", ""), data.get("location", "")
            )
            return jsonify({"success": True, "game": game.to_dict()}), 201
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>", methods=["GET"])
    def get_game(game_id: str):
        try:
            game = app_state.game_service.get_game(game_id)
            return jsonify({"success": True, "game": game.to_dict()})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>", methods=["DELETE"])
    def delete_game(game_id: str):
        try:
            app_state.game_service.delete_game(game_id)
            return jsonify({"success": True, "message": f"Game {game_id} deleted"})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/attendance", methods=["POST"])
    def set_attendance(game_id: str):
        """Replace the attendance list of a game."""
        try:
            player_ids = _payload().get("player_ids")
            if not isinstance(player_ids, list):
                return jsonify({"success": False, "error": "player_ids list required"}), 400
            game = app_state.game_service.set_attendance(game_id, player_ids)
            return jsonify({"success": True, "game": game.to_dict()})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/players/<player_id>/swaps", methods=["PUT"])
    def set_swaps_attended(game_id: str, player_id: str):
        """Record how many slots a player was present for."""
        try:
            swaps = int(_payload().get("swaps_attended"))
            stats = app_state.stats_service.set_swaps_attended(game_id, player_id, swaps)
            return jsonify({"success": True, "stats": stats.to_dict()})
        except (RotationError, ValueError, TypeError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/players/<player_id>/stats", methods=["POST"])
    def increment_stat(game_id: str, player_id: str):
        """Add to one of a player's counters, e.g. a made 2-pointer."""
        try:
            data = _payload()
            stats = app_state.stats_service.increment_stat(
                game_id, player_id, data.get("stat", ""), int(data.get("amount", 1))
            )
            return jsonify({"success": True, "stats": stats.to_dict()})
        except (RotationError, ValueError, TypeError) as e:
            return _error(e)

    # ==================== Live game ==================== #

    @app.route("/api/games/<game_id>/start", methods=["POST"])
    def start_game(game_id: str):
        try:
            game = app_state.game_service.start_game(game_id)
            return jsonify({"success": True, "game": game.to_dict()})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/advance", methods=["POST"])
    def advance_slot(game_id: str):
        """Move to the next quarter/swap."""
        try:
            game = app_state.game_service.advance_slot(game_id)
            return jsonify({"success": True, "game": game.to_dict()})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/end", methods=["POST"])
    def end_game(game_id: str):
        try:
            game = app_state.game_service.end_game(game_id)
            return jsonify({"success": True, "game": game.to_dict()})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/rotations", methods=["POST"])
    def add_rotation(game_id: str):
        """Record the lineup for a slot."""
        try:
            data = _payload()
            rotation = app_state.game_service.add_rotation(
                game_id,
                int(data.get("quarter")),
                int(data.get("swap")),
                data.get("player_ids") or [],
            )
            return jsonify({"success": True, "rotation": rotation.to_dict()}), 201
        except (RotationError, ValueError, TypeError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/court", methods=["GET"])
    def get_court(game_id: str):
        """Players on court and on the bench for the live slot."""
        try:
            on_court = app_state.game_service.get_current_players_on_court(game_id)
            available = app_state.game_service.get_available_players(game_id)
            return jsonify({
                "success": True,
                "on_court": [p.to_dict() for p in on_court],
                "available": [p.to_dict() for p in available],
            })
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/substitution", methods=["POST"])
    def make_substitution(game_id: str):
        """Split a slot's minutes between an outgoing and incoming player."""
        try:
            data = _payload()
            player_out = data.get("player_out")
            player_in = data.get("player_in")
            if not player_out or not player_in:
                return jsonify({"success": False, "error": "Both player_out and player_in required"}), 400

            rotation = app_state.substitution_service.substitute(
                game_id, int(data.get("quarter")), int(data.get("swap")), player_out, player_in
            )
            return jsonify({"success": True, "rotation": rotation.to_dict()})
        except (RotationError, ValueError, TypeError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/rotations/<int:quarter>/<int:swap>/minutes", methods=["PUT"])
    def set_player_minutes(game_id: str, quarter: int, swap: int):
        """Correct the minutes credited to one player in a played slot."""
        try:
            data = _payload()
            rotation = app_state.substitution_service.set_player_minutes(
                game_id, quarter, swap, data.get("player_id", ""), float(data.get("minutes"))
            )
            return jsonify({"success": True, "rotation": rotation.to_dict()})
        except (RotationError, ValueError, TypeError) as e:
            return _error(e)

    # ==================== Rotation planning ==================== #

    @app.route("/api/games/<game_id>/recommendations", methods=["GET"])
    def get_recommendations(game_id: str):
        """Ranked players for the upcoming slot."""
        try:
            exclude = {p for p in request.args.get("exclude", "").split(",") if p}
            recommendations = app_state.rotation_service.recommend(
                game_id,
                strategy=request.args.get("strategy", RotationStrategy.SIMPLE.value),
                count=int(request.args.get("count", 5)),
                exclude=exclude,
            )
            return jsonify({
                "success": True,
                "recommendations": [r.to_dict() for r in recommendations],
            })
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/optimize", methods=["POST"])
    def optimize_game(game_id: str):
        """Plan all eight slots of a game."""
        try:
            data = _payload()
            optimization = app_state.optimizer.optimize(
                game_id,
                attending_player_ids=data.get("attending_player_ids"),
                strategy=data.get("strategy", RotationStrategy.SIMPLE.value),
            )
            return jsonify({"success": True, "optimization": optimization.to_dict()})
        except (RotationError, ValueError, TypeError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/manual", methods=["GET"])
    def get_manual_rotations(game_id: str):
        try:
            rotations = app_state.manual_override_service.get_all_manual_rotations(game_id)
            return jsonify({"success": True, "manual_rotations": rotations})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/manual/<int:quarter>/<int:swap>", methods=["PUT"])
    def set_manual_rotation(game_id: str, quarter: int, swap: int):
        try:
            player_ids = _payload().get("player_ids")
            if not isinstance(player_ids, list):
                return jsonify({"success": False, "error": "player_ids list required"}), 400
            lineup = app_state.manual_override_service.set_manual_rotation(
                game_id, quarter, swap, player_ids
            )
            return jsonify({"success": True, "player_ids": lineup})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/manual/<int:quarter>/<int:swap>/toggle", methods=["POST"])
    def toggle_manual_player(game_id: str, quarter: int, swap: int):
        """Add or remove one player from a slot's manual lineup."""
        try:
            player_id = _payload().get("player_id")
            if not player_id:
                return jsonify({"success": False, "error": "player_id required"}), 400
            lineup = app_state.manual_override_service.toggle_player(game_id, quarter, swap, player_id)
            return jsonify({"success": True, "player_ids": lineup})
        except (RotationError, ValueError) as e:
            return _error(e)

    @app.route("/api/games/<game_id>/manual/<int:quarter>/<int:swap>", methods=["DELETE"])
    def clear_manual_rotation(game_id: str, quarter: int, swap: int):
        try:
            cleared = app_state.manual_override_service.clear_manual_rotation(game_id, quarter, swap)
            return jsonify({"success": True, "cleared": cleared})
        except (RotationError, ValueError) as e:
            return _error(e)

    return app


def run_web_app(host: str = "127.0.0.1", port: int = 7122, data_file: Optional[str] = None) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        data_file: JSON file backing the store
    """
    app = create_app(data_file=data_file)
    logger.info("Serving %s on http://%s:%d", data_file or "in-memory store", host, port)
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    run_web_app(data_file=os.environ.get("COURTSIDE_DATA_FILE", "courtside_data.json"))
