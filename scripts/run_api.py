from __future__ import annotations

import os

from _bootstrap import load_settings

from src.hr_portal.hr_portal.main import create_app


def main() -> None:
    settings = load_settings()
    app = create_app(settings)
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])


if __name__ == "__main__":
    main()
