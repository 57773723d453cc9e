import logging
import signal
from typing import Callable, Optional

from app_config import (
    AppConfigurationError,
    build_timer_configuration,
    load_app_config,
    resolve_config_path,
)
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomodoro_app")


def setup_signal_handlers(request_stop: Callable[[], None]) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logging.getLogger("pomodoro_app").info(
            "%s received, stopping...",
            signal.Signals(signum).name,
        )
        request_stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def main() -> int:
    logger = setup_logging(level=logging.INFO)

    try:
        app_config = load_app_config(str(resolve_config_path()))
        configuration = build_timer_configuration(app_config.timer)
        ui_config = UIServerConfig.from_settings(app_config.ui_server)
    except (AppConfigurationError, ServerConfigurationError) as error:
        logger.error("Configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(app_config.logging.level)
    logger.info("Loaded configuration from %s", app_config.source_file)

    ui_server: Optional[UIServer] = None
    if ui_config.enabled:
        ui_server = UIServer(config=ui_config, logger=logging.getLogger("ui_server"))
        try:
            ui_server.start()
        except RuntimeError as error:
            logger.error("Failed to start UI server: %s", error)
            return 1
    else:
        logger.info("UI server disabled via ui_server.enabled=false")

    runtime = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            app_config=app_config,
            configuration=configuration,
            ui_server=ui_server,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
        )
    )
    return runtime.run()


if __name__ == "__main__":
    raise SystemExit(main())
