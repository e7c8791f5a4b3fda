"""Tests for executor resource recommendations."""
from sparkadvisor.recommend import recommend_resources

GB = 1024 ** 3


def _shape(r):
    return (r.executor_memory_gb, r.executor_cores, r.executor_count, r.gpu_count)


def test_baseline_etl_and_mixed(make_characteristics):
    assert _shape(recommend_resources(make_characteristics("etl"))) == (8, 5, 4, None)
    assert _shape(recommend_resources(make_characteristics("mixed"))) == (8, 5, 4, None)


def test_baseline_memory_rounds_up(make_characteristics):
    # ceil(101 / 4) = 26
    r = recommend_resources(make_characteristics("etl", peak_gb=101.0))
    assert r.executor_memory_gb == 26


def test_ml_training(make_characteristics):
    assert _shape(recommend_resources(make_characteristics("ml-training"))) == (16, 8, 4, 1)
    # 250 GB -> ceil(2.5) GPUs
    r = recommend_resources(make_characteristics("ml-training", data_size_bytes=250 * GB, peak_gb=1000.0))
    assert _shape(r) == (250, 8, 4, 3)


def test_ml_inference_gpu_present_even_when_zero(make_characteristics):
    r = recommend_resources(make_characteristics("ml-inference"))
    assert r.gpu_count == 0
    assert r.gpu_count is not None
    assert r.executor_cores == 4
    r = recommend_resources(make_characteristics("ml-inference", data_size_bytes=300 * GB))
    assert r.gpu_count == 2


def test_analytics(make_characteristics):
    assert _shape(recommend_resources(make_characteristics("analytics", data_size_bytes=10 * GB))) == (12, 5, 4, None)
    r = recommend_resources(make_characteristics("analytics", data_size_bytes=1000 * GB))
    assert r.executor_count == 20


def test_streaming(make_characteristics):
    assert _shape(recommend_resources(make_characteristics("streaming"))) == (8, 4, 2, None)


def test_graph(make_characteristics):
    assert _shape(recommend_resources(make_characteristics("graph"))) == (16, 5, 8, 2)
    r = recommend_resources(make_characteristics("graph", data_size_bytes=500 * GB))
    assert r.executor_count == 20
    assert r.gpu_count == 5


def test_small_fraction_rounds_up(make_characteristics):
    """1 MB of analytics data still needs at least the minimum executors."""
    r = recommend_resources(make_characteristics("analytics", data_size_bytes=1024 ** 2))
    assert r.executor_count == 4
    r = recommend_resources(make_characteristics("ml-inference", data_size_bytes=1024 ** 2))
    assert r.gpu_count == 1
