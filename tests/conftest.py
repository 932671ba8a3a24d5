from pytest import fixture

from stak.machine import Machine


@fixture
def machine() -> Machine:
    return Machine()


@fixture
def run(machine: Machine):
    '''
    Apply every space separated token in turn, return resulting stack.
    '''
    def running(line: str) -> list:
        for token in line.split():
            machine.apply_token(token)
        return list(machine)
    return running
