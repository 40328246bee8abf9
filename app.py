"""
홀덤 족보 검사 Flask 앱
========================

실행:
    python app.py

환경 변수는 zkholdem.config 참조.
"""

from flask import Flask, jsonify
from tinydb import TinyDB

from zkholdem.config import Settings, setup_logging

from holdem_routes import holdem_bp, init_holdem_bp


def create_app(settings=None, db=None):
    """앱을 만든다.

    Args:
        settings: Settings (기본값: 환경 변수)
        db: TinyDB 인스턴스 (기본값: settings.db_path 파일 DB)
    """
    if settings is None:
        settings = Settings.from_env()
    if db is None:
        db = TinyDB(settings.db_path)               #Storage DB

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["HOLDEM_SETTINGS"] = settings

    init_holdem_bp(db.table("holdem"))
    app.register_blueprint(holdem_bp)

    @app.route("/")
    def main():
        return jsonify({
            "service": "zk-holdem",
            "k": settings.k,
            "straight_mode": settings.straight_mode.value,
            "bind_public": settings.bind_public,
            "endpoints": ["/holdem/schema", "/holdem/check", "/holdem/checks"],
        })

    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    create_app(settings).run(debug=True)
