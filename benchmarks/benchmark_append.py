"""Benchmark StrBuf against naive concatenation and list joining.

Run with:
    python benchmarks/benchmark_append.py
"""

import time

from chunkbuf import StrBuf


def benchmark(name: str, fn, iterations: int = 20) -> float:
    fn()  # Warmup
    start = time.perf_counter()
    for _ in range(iterations):
        fn()
    elapsed = (time.perf_counter() - start) / iterations
    print(f"{name:<28} {elapsed * 1000:8.2f} ms")
    return elapsed


def make_fragments(count: int = 50_000) -> list[str]:
    return [f"item-{i}," for i in range(count)]


def run_strbuf(fragments: list[str]) -> str:
    buf = StrBuf()
    for fragment in fragments:
        buf.append_str(fragment)
    return buf.get()


def run_formatted(fragments: list[str]) -> str:
    buf = StrBuf()
    for i in range(len(fragments)):
        buf.append("item-%d,", i)
    return buf.get()


def run_lists(fragments: list[str]) -> str:
    buf = StrBuf()
    buf.list_push("[", ",")
    for fragment in fragments:
        buf.list_append_str(fragment)
    buf.list_pop("]")
    return buf.get()


def run_concat(fragments: list[str]) -> str:
    out = ""
    for fragment in fragments:
        out += fragment
    return out


def run_join(fragments: list[str]) -> str:
    parts = []
    for fragment in fragments:
        parts.append(fragment)
    return "".join(parts)


def main() -> None:
    fragments = make_fragments()
    total = sum(len(f) for f in fragments)
    print(f"{len(fragments)} fragments, {total} characters\n")

    assert run_strbuf(fragments) == run_join(fragments)

    benchmark("StrBuf.append_str", lambda: run_strbuf(fragments))
    benchmark("StrBuf.append (formatted)", lambda: run_formatted(fragments))
    benchmark("StrBuf list_append_str", lambda: run_lists(fragments))
    benchmark("str += (baseline)", lambda: run_concat(fragments))
    benchmark("list + join (baseline)", lambda: run_join(fragments))


if __name__ == "__main__":
    main()
