#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e .
#setup: flask --app sipcalc.server run --port 5000 --debug

from sipcalc import config
from sipcalc.app import create_app

app = create_app()


def main() -> None:
    app.run(port=config.PORT, debug=True)


if __name__ == "__main__":
    main()
