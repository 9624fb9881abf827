from __future__ import annotations

from flask import Flask, jsonify, request

from positive_news import NewsPipeline, PipelineConfig
from positive_news.pipeline import candidate_to_dict, stats_to_dict

app = Flask(__name__)
_pipeline = NewsPipeline(PipelineConfig.from_env())


@app.get("/health")
def healthcheck():
    return {"status": "ok"}


@app.post("/candidates")
def fetch_candidates():
    payload = request.get_json(silent=True) or {}
    limit = payload.get("limit")
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
        return jsonify({"error": "`limit` must be a non-negative integer"}), 400
    try:
        result = _pipeline.run(max_count=limit)
        if payload.get("save"):
            _pipeline.save(result)
        return jsonify(
            {
                "candidates": [candidate_to_dict(candidate) for candidate in result.candidates],
                "stats": stats_to_dict(result.stats),
            }
        )
    except Exception as exc:  # pragma: no cover - runtime guard
        app.logger.exception("Uncaught exception when handling /candidates")
        return jsonify({"error": "Unexpected server error", "detail": str(exc)}), 500


if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=8008)
