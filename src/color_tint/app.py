from __future__ import annotations

import logging
import os
from typing import Any, Mapping

from flask import Flask, jsonify, render_template, request

# Project-local algorithms
from .rgb import InvalidCountError, ParseError
from .tint_curve import DEFAULT_RESIDUAL, GenerationRequest, generate

log = logging.getLogger(__name__)

DEFAULTS: Mapping[str, Any] = {
    "DEFAULT_BASE": "ff0000",
    "DEFAULT_TARGET": "ffffff",
    "DEFAULT_COUNT": 10,
    "MAX_COUNT": 512,
    "TINT_RESIDUAL": DEFAULT_RESIDUAL,
    "LOG_LEVEL": "INFO",
}


def strip_hash(s: Any) -> str:
    """'#FFaa00 ' -> 'FFaa00'; validation is left to the parser."""
    return ("" if s is None else str(s)).strip().removeprefix("#")


def parse_count(val: str | None, default: int, max_count: int) -> int:
    if val is None or not val.strip():
        n = int(default)
    else:
        try:
            n = int(val.strip())
        except ValueError:
            raise InvalidCountError(f"n must be an integer, got {val!r}") from None
    # only the upper end is clamped; n < 2 is rejected by the generator
    return min(n, int(max_count))


def build_request(args: Mapping[str, str], config: Mapping[str, Any]) -> GenerationRequest:
    n = parse_count(args.get("n"), config["DEFAULT_COUNT"], config["MAX_COUNT"])
    return GenerationRequest.from_strings(
        strip_hash(args.get("base", config["DEFAULT_BASE"])),
        strip_hash(args.get("target", config["DEFAULT_TARGET"])),
        n,
        residual=float(config["TINT_RESIDUAL"]),
    )


# ----------------------------- Flask app ----------------------------------


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__, static_folder=None, template_folder="templates")
    app.config.from_mapping(DEFAULTS)
    app.config.from_prefixed_env("COLOR_TINT")
    # colour defaults stay raw strings; JSON decoding turns "112e33" into a float
    for key in ("DEFAULT_BASE", "DEFAULT_TARGET"):
        raw = os.environ.get(f"COLOR_TINT_{key}")
        if raw is not None:
            app.config[key] = raw
    if config:
        app.config.from_mapping(config)

    level = getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    @app.route("/")
    def index():
        return render_template(
            "index.html",
            base="#" + strip_hash(app.config["DEFAULT_BASE"]),
            target="#" + strip_hash(app.config["DEFAULT_TARGET"]),
            count=app.config["DEFAULT_COUNT"],
            max_count=app.config["MAX_COUNT"],
        )

    @app.route("/generate")
    def generate_palette():
        try:
            req = build_request(request.args, app.config)
        except ParseError as exc:
            log.info("Rejected colour input: %s", exc)
            return jsonify({"error": f"invalid color: {exc}", "kind": "parse"}), 400
        except InvalidCountError as exc:
            log.info("Rejected step count: %s", exc)
            return jsonify({"error": str(exc), "kind": "count"}), 400
        except ValueError as exc:
            log.exception("Invalid palette settings")
            return jsonify({"error": str(exc)}), 500

        try:
            palette = generate(req)
        except Exception as exc:
            log.exception("Palette generation failed")
            return jsonify({"error": str(exc)}), 500

        return jsonify([entry.to_dict() for entry in palette])

    return app
