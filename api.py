"""
REST API for the Rate Finder.

Serves the parsed workbook to other frontends:
- POL/POD choice lists
- Rate search by POL + POD
- Local charges and remarks
- Reload of the workbook

Run with: python api.py
"""

import os
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from flask import Flask, request, jsonify
from flask_cors import CORS

from rate_finder.config import AppConfig, load_app_config
from rate_finder.lookup import search
from rate_finder.models import RateCatalog
from rate_finder.rate_sheets import load_rate_catalog


CONFIG_PATH = Path(__file__).resolve().parent / "config.toml"

CatalogLoader = Callable[..., RateCatalog]


def create_app(config: AppConfig, loader: CatalogLoader = load_rate_catalog) -> Flask:
    """
    Build the Flask app and load the workbook once.

    If loading fails the app still starts, but data endpoints answer 503
    with the load error until a reload succeeds.
    """
    app = Flask(__name__)
    CORS(app)  # Enable CORS for frontend access

    app.config["RATE_CATALOG"] = None
    app.config["RATE_CATALOG_ERROR"] = None

    def reload_catalog() -> RateCatalog:
        catalog = loader(config=config)
        # Single swap: requests keep seeing the old catalog until here.
        app.config["RATE_CATALOG"] = catalog
        app.config["RATE_CATALOG_ERROR"] = None
        return catalog

    try:
        reload_catalog()
    except (FileNotFoundError, ValueError) as e:
        app.config["RATE_CATALOG_ERROR"] = str(e)

    def current_catalog() -> RateCatalog | None:
        return app.config["RATE_CATALOG"]

    def unavailable():
        return jsonify({
            "success": False,
            "error": app.config["RATE_CATALOG_ERROR"] or "Rate catalog not loaded"
        }), 503

    @app.route("/health", methods=["GET"])
    def health():
        """Health check endpoint."""
        catalog = current_catalog()
        return jsonify({
            "status": "healthy" if catalog is not None else "degraded",
            "service": "rate-finder-api",
            "rates_loaded": len(catalog.rates) if catalog is not None else 0,
            "timestamp": datetime.now(timezone.utc).isoformat()
        })

    @app.route("/api/ports", methods=["GET"])
    def list_ports():
        """Sorted unique POL and POD values."""
        catalog = current_catalog()
        if catalog is None:
            return unavailable()
        return jsonify({
            "success": True,
            "origins": list(catalog.origins),
            "destinations": list(catalog.destinations)
        })

    @app.route("/api/rates", methods=["GET"])
    def find_rates():
        """
        Search rates for a POL/POD pair.

        Query string: ?pol=Callao&pod=Rotterdam

        Response:
        {
            "success": true,
            "status": "ok" | "no_matches" | "incomplete",
            "message": "...",
            "rates": [ { "origin": ..., "destination": ..., ... } ]
        }
        """
        catalog = current_catalog()
        if catalog is None:
            return unavailable()

        result = search(catalog.rates, request.args.get("pol", ""), request.args.get("pod", ""))
        return jsonify({
            "success": True,
            "status": result.status,
            "message": result.message,
            "rates": [asdict(r) for r in result.rates]
        })

    @app.route("/api/local-charges", methods=["GET"])
    def list_local_charges():
        catalog = current_catalog()
        if catalog is None:
            return unavailable()
        return jsonify({
            "success": True,
            "local_charges": [asdict(c) for c in catalog.local_charges]
        })

    @app.route("/api/remarks", methods=["GET"])
    def list_remarks():
        catalog = current_catalog()
        if catalog is None:
            return unavailable()
        return jsonify({
            "success": True,
            "remarks": list(catalog.remarks)
        })

    @app.route("/api/reload", methods=["POST"])
    def reload():
        """Re-read the workbook. On failure the previous catalog stays active."""
        try:
            catalog = reload_catalog()
        except (FileNotFoundError, ValueError) as e:
            if current_catalog() is None:
                app.config["RATE_CATALOG_ERROR"] = str(e)
            return jsonify({
                "success": False,
                "error": str(e)
            }), 500

        return jsonify({
            "success": True,
            "rates_loaded": len(catalog.rates),
            "warnings": list(catalog.warnings)
        })

    return app


if __name__ == "__main__":
    port = int(os.getenv("API_PORT", 5001))
    debug = os.getenv("API_DEBUG", "true").lower() == "true"

    app = create_app(load_app_config(CONFIG_PATH))

    print(f"\n{'='*60}")
    print("RATE FINDER API")
    print(f"{'='*60}")
    print(f"Running on: http://localhost:{port}")
    print(f"Debug mode: {debug}")
    print(f"\nEndpoints:")
    print(f"  GET  /health              - Health check")
    print(f"  GET  /api/ports           - POL / POD lists")
    print(f"  GET  /api/rates?pol=&pod= - Rate search")
    print(f"  GET  /api/local-charges   - Local charges")
    print(f"  GET  /api/remarks         - Remarks")
    print(f"  POST /api/reload          - Reload workbook")
    print(f"{'='*60}\n")

    app.run(host="0.0.0.0", port=port, debug=debug)
