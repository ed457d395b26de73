"""Run the storefront API with uvicorn: `python -m storefront`."""

import argparse

import uvicorn

from storefront.core.config import StoreConfig
from storefront.store import create_app
from storefront.ui import print_welcome


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the storefront API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=4001)
    parser.add_argument("--env-file", default=None)
    args = parser.parse_args()

    config = StoreConfig.from_env(args.env_file)
    app = create_app(config)
    print_welcome(config, args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
