"""
Tests for structured logging
"""

import json
import logging

from autovault.logging_config import JSONFormatter, setup_logging, log_action


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestJSONFormatter:
    """Test JSON log lines"""
    
    def test_basic_fields(self):
        record = logging.LogRecord("autovault.vault", logging.INFO, __file__, 1,
                                   "Deposited %s", ("5.0000",), None)
        
        entry = json.loads(JSONFormatter().format(record))
        
        assert entry["level"] == "INFO"
        assert entry["logger"] == "autovault.vault"
        assert entry["message"] == "Deposited 5.0000"
        assert "timestamp" in entry
        assert "action" not in entry
    
    def test_structured_fields(self):
        record = logging.LogRecord("autovault.vault", logging.INFO, __file__, 1, "x", (), None)
        record.action = "withdraw"
        record.operation_id = "WITHDRAW-1-ABCDEF"
        record.extra = {"amount": 1.0}
        
        entry = json.loads(JSONFormatter().format(record))
        
        assert entry["action"] == "withdraw"
        assert entry["operation_id"] == "WITHDRAW-1-ABCDEF"
        assert entry["extra"] == {"amount": 1.0}
    
    def test_exception_included(self):
        try:
            raise ValueError("bad snapshot")
        except ValueError:
            import sys
            record = logging.LogRecord("autovault", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
        
        entry = json.loads(JSONFormatter().format(record))
        
        assert "bad snapshot" in entry["exception"]


class TestSetupLogging:
    """Test logger configuration"""
    
    def test_json_handler(self):
        logger = setup_logging("DEBUG", logger_name="autovault.test_json")
        
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.propagate is False
    
    def test_text_handler_and_no_duplicates(self):
        setup_logging("INFO", logger_name="autovault.test_text", fmt="text")
        logger = setup_logging("WARNING", logger_name="autovault.test_text", fmt="text")
        
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.level == logging.WARNING


class TestLogAction:
    """Test structured action records"""
    
    def setup_method(self):
        self.logger = logging.getLogger("autovault.test_actions")
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False
        self.handler = ListHandler()
        self.logger.handlers = [self.handler]
    
    def test_fields_attached(self):
        log_action(self.logger, "info", "Deposited 5.0000", action="deposit",
                   resource="vault", operation_id="DEPOSIT-1-ABCDEF", extra={"amount": 5.0})
        
        record = self.handler.records[0]
        assert record.getMessage() == "Deposited 5.0000"
        assert record.action == "deposit"
        assert record.resource == "vault"
        assert record.operation_id == "DEPOSIT-1-ABCDEF"
        assert record.extra == {"amount": 5.0}
    
    def test_level_filtering(self):
        log_action(self.logger, "debug", "hidden", action="deposit")
        
        assert self.handler.records == []
