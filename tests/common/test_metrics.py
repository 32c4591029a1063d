from src.common.metrics import MetricsCollector


def test_empty_metrics():
    metrics = MetricsCollector().get_metrics()
    assert metrics.predictions_served == 0
    assert metrics.avg_prediction_time_ms == 0.0
    assert metrics.cache_hit_rate == 0.0


def test_records_are_aggregated():
    collector = MetricsCollector()
    collector.record_prediction(10.0)
    collector.record_prediction(30.0)
    collector.record_cache_hit()
    collector.record_cache_hit()
    collector.record_cache_hit()
    collector.record_cache_miss()
    collector.record_lookup_failure()
    collector.record_ingested(4)

    metrics = collector.get_metrics()
    assert metrics.predictions_served == 2
    assert metrics.avg_prediction_time_ms == 20.0
    assert metrics.cache_hit_rate == 0.75
    assert metrics.lookup_failures == 1
    assert metrics.incidents_ingested == 4
    assert set(metrics.to_dict()) >= {'predictions_served', 'cache_hit_rate', 'uptime_seconds'}


def test_latency_buffer_is_bounded():
    collector = MetricsCollector()
    for _ in range(1500):
        collector.record_prediction(1.0)
    assert len(collector.prediction_times) == 1000
    assert collector.get_metrics().predictions_served == 1500
