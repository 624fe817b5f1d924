from timeit import timeit

from plang.interpreter import Interpreter
from plang.types.environment import Environment

# Helpers to parse and resolve once, so only execution is measured
from plang.reader.parser import parse


def time_execution(code: str, rounds: int) -> float:
    """Time execution only: parse and resolve once, then re-run the same statements."""
    itp = Interpreter()
    statements = parse(code)
    itp.resolve(statements)
    # Warmup
    itp.execute_program(statements)
    # Timed
    return timeit(lambda: itp.execute_program(statements), number=rounds)


def time_end_to_end(code: str, rounds: int) -> float:
    """Time lexing, parsing, resolving and executing together."""
    itp = Interpreter()
    return timeit(lambda: itp.run(code), number=rounds)


# Environment lookup at a fixed distance vs. a walk to the global frame

def bench_lookup_chain(n_envs: int = 1000, n_lookups: int = 10000) -> tuple[float, float]:
    root = Environment()
    root.define("answer", 42.0)
    env = root
    for _ in range(n_envs):
        env = env.enclose()
    # Warmup
    for _ in range(1000):
        env.get_at("answer", n_envs)
    t_at = timeit(lambda: env.get_at("answer", n_envs), number=n_lookups)
    t_global = timeit(lambda: env.get_global("answer"), number=n_lookups)
    return t_at, t_global


CALL_CODE = r"""
fun add(a, b) { return a + b; }
var r = add(1, 2);
"""

RECURSION_CODE = r"""
fun fib(n) { if (n < 2) return n; return fib(n - 1) + fib(n - 2); }
var r = fib(15);
"""

LOOP_CODE = r"""
var sum = 0;
for (var i = 0; i < 500; i = i + 1) { sum = sum + i; }
"""

CLOSURE_CODE = r"""
fun counter() { var c = 0; fun inc() { c = c + 1; return c; } return inc; }
var next = counter();
for (var i = 0; i < 200; i = i + 1) next();
"""

METHOD_CODE = r"""
class A { get() { return 1; } }
class B : A { get() { return super.get() + 1; } }
var b = B();
var total = 0;
for (var i = 0; i < 200; i = i + 1) total = total + b.get();
"""


def _print_pair(name: str, code: str, rounds: int) -> None:
    texec = time_execution(code, rounds)
    tall = time_end_to_end(code, rounds)
    print(f"Benchmark: {name}")
    print(f"  execution only: {texec:.6f}s  |  end to end: {tall:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    print("Benchmark: environment lookup chain (1000 frames)")
    t_at, t_global = bench_lookup_chain()
    print(f"  get_at: {t_at:.6f}s  |  get_global: {t_global:.6f}s")

    _print_pair("function call", CALL_CODE, rounds=2000)
    _print_pair("recursion (fib 15)", RECURSION_CODE, rounds=5)
    _print_pair("for loop sum 0..499", LOOP_CODE, rounds=50)
    _print_pair("closure counter", CLOSURE_CODE, rounds=50)
    _print_pair("method + super dispatch", METHOD_CODE, rounds=50)
