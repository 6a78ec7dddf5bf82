import pytest


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    '''The part files live in the current directory, so we move there.'''
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def pattern():
    '''Returns a function generating not repeating data of the given length'''
    def _pattern(length, seed=0):
        return bytes([(seed + _ * 7) & 0xff for _ in range(length)])

    return _pattern
