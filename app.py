"""Development entry point: ``python app.py`` serves the portal on localhost."""

from hr_portal.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
