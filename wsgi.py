# wsgi.py
from jewelry_api import create_app

application = create_app()

if __name__ == "__main__":
    application.run(host="0.0.0.0", port=application.config["PORT"])
