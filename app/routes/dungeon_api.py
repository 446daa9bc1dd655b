"""
project: Dungeon Generator
module: dungeon_api.py
License: MIT

Dungeon generation HTTP routes.

Query parameters (all optional, clamped by ``DungeonConfig.from_params``):
    dungeonWidth, dungeonHeight, roomAttempts, minRoomSize, maxRoomSize,
    pixelSize, seed, strict

Endpoints:
    GET /generate/          PNG image of a freshly generated dungeon
    GET /generate/json/     row-major integer grid of tile materials
    GET /generate/metrics/  seed, generation metrics and structural analysis
"""

from flask import Blueprint, Response, current_app, jsonify, request

from app.dungeon import generate_from_config
from app.dungeon.config import DungeonConfig
from app.dungeon.metrics import analyze
from app.dungeon.render import png_bytes
from app.dungeon.serialize import to_json_grid
from app.logging_utils import get_logger

bp_dungeon = Blueprint("dungeon_api", __name__)

log = get_logger("dungeon.api")

SEED_HEADER = "X-Dungeon-Seed"


def _config_from_request() -> DungeonConfig:
    config = DungeonConfig.from_params(request.args)
    if "strict" not in request.args:
        config.strict_connectivity = bool(current_app.config.get("DUNGEON_STRICT_CONNECTIVITY"))
    return config


def _generate():
    config = _config_from_request()
    dungeon = generate_from_config(
        config,
        enable_metrics=bool(current_app.config.get("DUNGEON_ENABLE_GENERATION_METRICS", True)),
    )
    log.debug(event="generate_request", path=request.path, seed=dungeon.seed, width=config.width, height=config.height)
    return config, dungeon


@bp_dungeon.route("/generate/", methods=["GET"])
def generate_png():
    config, dungeon = _generate()
    resp = Response(png_bytes(dungeon, config.pixel_size), mimetype="image/png")
    resp.headers[SEED_HEADER] = str(dungeon.seed)
    return resp


@bp_dungeon.route("/generate/json/", methods=["GET"])
def generate_json():
    _config, dungeon = _generate()
    resp = jsonify(to_json_grid(dungeon))
    resp.headers[SEED_HEADER] = str(dungeon.seed)
    return resp


@bp_dungeon.route("/generate/metrics/", methods=["GET"])
def generate_metrics():
    config, dungeon = _generate()
    report = analyze(dungeon)
    resp = jsonify(
        {
            "seed": dungeon.seed,
            "width": dungeon.width,
            "height": dungeon.height,
            "rooms": len(dungeon.rooms),
            "regions": dungeon.num_regions,
            "config": config.to_dict() | {"seed": dungeon.seed},
            "metrics": dungeon.metrics,
            "analysis": {
                "tiles": report["tiles"],
                "components": report["components"],
                "floor_components": report["floor_components"],
                "rooms_without_edges": report["rooms_without_edges"],
                "dead_ends": len(report["dead_ends"]),
                "region_violations": len(report["region_violations"]),
            },
        }
    )
    resp.headers[SEED_HEADER] = str(dungeon.seed)
    return resp
