from pytest import Item, fixture

from infix import FUNCTIONS, Evaluator, Function, mapping_resolver


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP and enable_assertion_pass_hook.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))


class Counter:
    '''
    A function with a visible side effect: counts its calls.
    '''
    def __init__(self):
        self.calls = 0

    def __call__(self, evaluator, arguments):
        self.calls += 1
        return float(self.calls)


@fixture
def counter():
    return Counter()


@fixture
def evaluator(counter):
    '''
    Evaluator knowing x, y and name, plus a tick() function bumping counter.
    '''
    functions = dict(FUNCTIONS)
    functions['tick'] = Function('tick', counter)
    return Evaluator(mapping_resolver({'x': 2.0, 'y': 10, 'name': 'Bob'}),
                     functions=functions)
