"""
Integration tests wiring loggers, the collector and storage together.
"""

from io import StringIO

from collectlog import (
    ConsoleTransport,
    FileLogStorage,
    LogCollector,
    LoggerOptions,
    LoggerRegistry,
    ManualScheduler,
    MemoryLogStorage,
    read_log_file,
)


class TestIntegration:
    """End-to-end behaviour."""

    def test_collector_as_global_transport(self, tmp_path):
        log_file = tmp_path / "remote.jsonl"
        console = StringIO()
        registry = LoggerRegistry(console=ConsoleTransport(console))
        scheduler = ManualScheduler()

        with FileLogStorage(log_file) as storage:
            collector = LogCollector(storage, scheduler=scheduler, store_interval=10)
            registry.add_global_transport(collector)
            collector.start()

            logger = registry.get_logger("app")
            logger.info("user logged in")
            logger.error("lookup failed", {"user": 7})
            logger.debug("verbose detail")

            scheduler.advance(10)
            collector.stop()

        records = read_log_file(log_file)
        assert len(records) == 3
        assert all(record["count"] == 1 for record in records)
        assert records[0]["text"].endswith(
            ",[app],<test_collector_as_global_transport>: ,user logged in"
        )
        assert records[1]["text"].endswith(',lookup failed,{"user":7}')
        # The timestamp of the log call leads the text
        assert records[0]["text"].startswith(records[0]["timestamp"][:19])

        assert console.getvalue().count("\n") == 3

    def test_level_threshold_applies_before_collection(self):
        registry = LoggerRegistry(console=None)
        registry.set_global_options(LoggerOptions(disable_caller_info=True))
        storage = MemoryLogStorage()
        collector = LogCollector(storage, scheduler=ManualScheduler())
        registry.add_global_transport(collector)

        logger = registry.get_logger("svc")
        registry.set_log_level("warn")
        logger.info("hidden")
        logger.warn("shown")
        collector.flush()

        texts = storage.texts()
        assert len(texts) == 1
        assert texts[0].endswith(",[svc],shown")

    def test_storage_outage_preserves_order(self):
        registry = LoggerRegistry(console=None)
        storage = MemoryLogStorage(ready=False)
        scheduler = ManualScheduler()
        collector = LogCollector(
            storage, scheduler=scheduler, max_entry_length=40, store_interval=5
        )
        logger = registry.get_untracked_logger(
            transports=[collector], options=LoggerOptions(disable_caller_info=True)
        )
        collector.start()

        for i in range(6):
            logger.log(f"event {i}")
            scheduler.advance(1)

        assert storage.batches == []
        assert collector.output_cache

        # Cached batches go out with the next non-empty flush
        storage.ready = True
        logger.log("event 6")
        scheduler.advance(5)
        collector.stop()

        delivered = [text.rsplit(",", 1)[1] for text in storage.texts()]
        assert delivered == [f"event {i}" for i in range(7)]
        assert collector.output_cache == ()
