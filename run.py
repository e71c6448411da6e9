# run.py
import sys
import os
import uvicorn
import argparse
import logging

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
# packages like 'core', 'api', 'schemas' live next to this file
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.config import ConfigError, get_config_manager
from core.logging import setup_logging

logger = logging.getLogger(f"webunit.{__name__}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the Webunit test front-end.")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to the YAML configuration (default: $WEBUNIT_CONFIG_PATH or config/config.yaml).",
    )
    parser.add_argument(
        "--prod",
        action="store_true",
        help="Run in production mode (multiple workers, no reload).",
    )
    parser.add_argument("--host", type=str, default=None, help="Host to bind the server to (overrides config).")
    parser.add_argument("--port", type=int, default=None, help="Port to bind the server to (overrides config).")
    parser.add_argument("--workers", type=int, default=None, help="Number of worker processes (overrides config, used in --prod mode).")
    args = parser.parse_args()

    try:
        if args.config:
            # worker processes load the same file through the environment
            os.environ["WEBUNIT_CONFIG_PATH"] = args.config
        config = get_config_manager(args.config)
        setup_logging(config)
        # fail here, not inside a worker, when the webunit section is invalid
        config.build_settings()
    except (ConfigError, OSError, ValueError) as e:
        logging.basicConfig(level=logging.INFO)
        logger.critical(f"Cannot start webunit: {e}")
        return 1

    host_to_use = args.host if args.host is not None else config.get_config("server.host", "127.0.0.1")
    port_to_use = args.port if args.port is not None else config.get_config("server.port", 8000)

    run_config = {
        "app": "main:create_app",
        "factory": True,
        "host": host_to_use,
        "port": port_to_use,
    }

    if args.prod:
        workers_to_use = args.workers if args.workers is not None else config.get_config("server.workers", 1)
        run_config["workers"] = max(1, workers_to_use)
        run_config["reload"] = False
        logger.info(
            f"Starting server in PRODUCTION mode on {host_to_use}:{port_to_use} "
            f"with {run_config['workers']} worker(s)."
        )
    else:
        run_config["reload"] = True
        run_config["reload_dirs"] = [".", "core", "api", "schemas", "utils"]
        logger.info(
            f"Starting server in DEVELOPMENT mode on {host_to_use}:{port_to_use} "
            f"with auto-reload enabled."
        )

    uvicorn.run(**run_config)
    return 0

if __name__ == "__main__":
    sys.exit(main())
