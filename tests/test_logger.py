"""
Tests for logger functionality.
"""

import pytest
from talentmatch.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with zeroed metrics."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        assert logger.logger.name == "test"
        assert logger.metrics["rank_requests"] == 0
        assert logger.metrics["similarity_checks"] == 0

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

    def test_context_written_to_file(self, tmp_path):
        """Context kwargs are rendered as JSON in the log file."""
        logger = StructuredLogger(name="test-context", log_dir=tmp_path, enable_console=False)
        logger.info("Ranked job", job_id="job-1", returned=3)
        for handler in logger.logger.handlers:
            handler.flush()

        log_files = list(tmp_path.glob("talentmatch_*.log"))
        assert len(log_files) == 1
        content = log_files[0].read_text(encoding="utf-8")
        assert 'Ranked job | Context: {"job_id": "job-1", "returned": 3}' in content

    def test_scoring_metrics(self, tmp_path):
        """Scored and filtered candidates are counted."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.record_rank_request()
        logger.record_candidate_scored(included=True)
        logger.record_candidate_scored(included=True)
        logger.record_candidate_scored(included=False)
        logger.record_candidate_scored(included=True)

        metrics = logger.get_metrics()
        assert metrics["rank_requests"] == 1
        assert metrics["candidates_scored"] == 4
        assert metrics["candidates_filtered"] == 1
        assert metrics["inclusion_rate"] == 0.75

    def test_inclusion_rate_without_scoring(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        assert logger.get_metrics()["inclusion_rate"] == 0

    def test_extraction_failures(self, tmp_path):
        """Failures are counted in total and by type."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.record_extraction_failure("KeyError")
        logger.record_extraction_failure("KeyError")
        logger.record_extraction_failure("TypeError")

        metrics = logger.get_metrics()
        assert metrics["extraction_failures"] == 3
        assert metrics["errors_by_type"] == {"KeyError": 2, "TypeError": 1}

    def test_similarity_metrics(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.record_similarity_check(compared=10, flagged=2)
        logger.record_similarity_check(compared=5, flagged=0)

        metrics = logger.get_metrics()
        assert metrics["similarity_checks"] == 2
        assert metrics["histories_compared"] == 15
        assert metrics["histories_flagged"] == 2

    def test_metrics_snapshot_is_a_copy(self, tmp_path):
        """Mutating a snapshot leaves the logger untouched."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_extraction_failure("KeyError")

        snapshot = logger.get_metrics()
        snapshot["errors_by_type"]["KeyError"] = 99

        assert logger.get_metrics()["errors_by_type"]["KeyError"] == 1

    def test_metrics_summary(self, tmp_path):
        """Summary logging should not raise."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_candidate_scored(included=True)
        logger.record_extraction_failure("ValueError")
        logger.log_metrics_summary()

    def test_invalid_level(self, tmp_path):
        with pytest.raises(AttributeError):
            StructuredLogger(name="test", level="LOUD", log_dir=tmp_path, enable_console=False)


class TestGlobalLogger:
    """Test the global logger instance."""

    def test_get_logger_returns_same_instance(self):
        """get_logger should return the cached instance."""
        assert get_logger() is get_logger()

    def test_reset_logger(self, tmp_path):
        """reset_logger forces a new instance."""
        first = get_logger()
        reset_logger()
        second = get_logger(log_dir=tmp_path, enable_console=False)
        assert first is not second
