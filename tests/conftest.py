import pytest

from plang.interpreter import Interpreter


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def run(interp, capsys):
    """Run source in a shared session and return the printed lines."""
    def _run(source: str) -> list[str]:
        interp.run(source)
        return capsys.readouterr().out.splitlines()
    return _run


SAMPLE_DOCUMENT = """\
class Shape {
  init(name) { this.name = name; }
  area() { return 0; }
}
class Square : Shape {
  area() { return this.side * this.side; }
}
fun describe(shape, unit) {
  return shape.name + unit;
}
var count = 0;
"""


@pytest.fixture
def sample_index():
    from plang_lsp.indexer import build_index
    return build_index(SAMPLE_DOCUMENT)
