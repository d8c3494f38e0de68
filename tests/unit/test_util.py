from metafold.util import construct_params


def test_construct_params_drops_none_but_keeps_falsy_values() -> None:
    params = construct_params({"a": 0, "b": False, "c": None, "d": "x"})
    assert params == {"a": 0, "b": False, "d": "x"}


def test_construct_params_accepts_keywords() -> None:
    assert construct_params(sort="id:1", q=None) == {"sort": "id:1"}
    assert construct_params({"name": ""}, size=0) == {"name": "", "size": 0}
    assert construct_params() == {}
