import logging
import sys

from club_eligibility.cli._logging import configure_logging


class TestConfigureLogging:
    def setup_method(self) -> None:
        root = logging.getLogger()
        root.handlers.clear()
        root.setLevel(logging.WARNING)
        logging.getLogger("club_eligibility").setLevel(logging.NOTSET)

    def test_package_logs_info_by_default(self) -> None:
        configure_logging()
        logger = logging.getLogger("club_eligibility.services.dataset_loader")
        assert logger.isEnabledFor(logging.INFO)
        assert not logger.isEnabledFor(logging.DEBUG)

    def test_libraries_stay_at_warning(self) -> None:
        configure_logging()
        assert logging.getLogger().level == logging.WARNING
        assert not logging.getLogger("config").isEnabledFor(logging.INFO)

    def test_verbose_enables_debug_everywhere(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("club_eligibility.ingest").isEnabledFor(logging.DEBUG)
        assert logging.getLogger("config").isEnabledFor(logging.DEBUG)

    def test_handler_writes_to_stderr(self) -> None:
        configure_logging()
        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr

    def test_idempotent(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1
