import geostruct


def error_kinds(result):
    """The error class names of a failed result, in order"""
    assert not result.ok, f"expected a failure, got {result!r}"
    return [type(e).__name__ for e in result.errors]


def ring(*positions):
    """A linear ring of float positions, failing loudly if invalid"""
    return geostruct.make_linear_ring(tuple(map(float, p)) for p in positions).unwrap()


def line(*positions):
    return geostruct.make_line_string(tuple(map(float, p)) for p in positions).unwrap()


SQUARE = ring((0, 0), (1, 0), (1, 1), (0, 1), (0, 0))
HOLE = ring((0.25, 0.25), (0.75, 0.25), (0.75, 0.75), (0.25, 0.25))
