import asyncio
import inspect
import time
import traceback
from contextlib import contextmanager
from functools import wraps
from typing import List, Dict, Any, Callable, Iterator, Optional, Type, Tuple, Union

_suite_state: Dict[str, List[Dict[str, Any]]] = {
    'tests': [],
    'results': []
}

PASS_FACE = '(^ ω ^)'
FAIL_FACE = '(ﾉಥДಥ)ﾉ'
SUMMARY_FACE = '☆*:.｡.o(≧▽≦)o.｡.:*☆'


class _c:
    """a tiny, silent class for holding color codes."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


# --- custom exception for assertions ---

class TestAssertionError(AssertionError):
    """custom error to distinguish assertion failures from other exceptions."""
    pass

# --- public api ---

def test(description: str) -> Callable:
    """
    decorator to register a function as a test case.
    coroutine functions are registered too; the wrapper drives them with asyncio.run,
    so the same test can be collected by pytest without an async plugin.
    """

    def decorator(func: Callable) -> Callable:
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                return asyncio.run(func(*args, **kwargs))
        else:
            @wraps(func)
            def wrapper(*args, **kwargs):
                return func(*args, **kwargs)

        _suite_state['tests'].append({'func': wrapper, 'description': description})
        return wrapper

    return decorator


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    """custom assertion that raises a specific, catchable error type."""
    if not condition:
        raise TestAssertionError(message)


@contextmanager
def assert_raises(expected: Union[Type[BaseException], Tuple[Type[BaseException], ...]],
                  message: str = "expected an exception") -> Iterator[Dict[str, Any]]:
    """
    the block must raise `expected`. the yielded dict receives the exception under 'error'.
    any other exception propagates unchanged.
    """
    caught: Dict[str, Any] = {}
    try:
        yield caught
    except expected as e:
        caught['error'] = e
        return
    raise TestAssertionError(f"{message}: nothing raised")


def run(title: str = "test run", only: Optional[str] = None, verbose: bool = False) -> int:
    """
    run the registered tests and print a report. `only` keeps tests whose description
    contains it. returns the number of failures.
    """
    print(f"\n{_c.info}--- starting: {title} ---{_c.reset}")
    started = time.perf_counter()
    results = []

    for entry in _suite_state['tests']:
        if only is not None and only not in entry['description']:
            continue
        error = None
        began = time.perf_counter()
        try:
            entry['func']()
        except TestAssertionError as e:
            error = f"assertion failed: {e}"
        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            if verbose:
                traceback.print_exc()
        elapsed = (time.perf_counter() - began) * 1000
        results.append({'passed': error is None, 'description': entry['description'],
                        'error': error, 'ms': elapsed})

        if error is None:
            print(f"  {_c.ok}✔ pass{_c.reset}  {PASS_FACE}  {entry['description']} {_c.grey}({elapsed:.1f}ms){_c.reset}")
        else:
            print(f"  {_c.fail}✖ fail{_c.reset}  {FAIL_FACE}  {entry['description']}")
            print(f"    {_c.grey}└─> {error}{_c.reset}")

    _suite_state['results'] = results
    # registered tests are consumed so several suites can run from one script
    _suite_state['tests'] = []
    failures = _print_summary(results, started)
    return failures


def _print_summary(results: List[Dict[str, Any]], started: float) -> int:
    total_ms = (time.perf_counter() - started) * 1000
    failures = sum(1 for r in results if not r['passed'])
    color = _c.ok if failures == 0 else _c.fail

    print(f"\n{color}--- summary ---{_c.reset}")
    print(f"  {SUMMARY_FACE}  ran {_c.info}{len(results)}{_c.reset} tests in {_c.warn}{total_ms:.2f}ms{_c.reset}")
    print(f"  {_c.ok}passed: {len(results) - failures}{_c.reset}, {_c.fail}failed: {failures}{_c.reset}")
    if results:
        slowest = max(results, key=lambda r: r['ms'])
        print(f"  {_c.grey}slowest: {slowest['description']} ({slowest['ms']:.1f}ms){_c.reset}")
    print(f"{color}---------------{_c.reset}\n")
    return failures
