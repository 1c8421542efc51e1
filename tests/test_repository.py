import pytest

from bullscows.repository import DBGameStore
from bullscows.engine import Code

def test_repository_flow(db_session):
    repo = DBGameStore(db_session)

    state = repo.create(secret=Code.from_number(1234))
    gid = state.game_id
    assert state.candidates_left == 5040
    assert repo.get_secret(gid) is None

    # Guess (not win)
    state = repo.guess(gid, Code.from_number(1987))
    assert state.status == "in_progress"
    assert state.history[0].bulls == 1
    assert state.history[0].cows == 0
    assert state.history[0].message == "1 bull(s), 0 cow(s)"

    # Win
    state = repo.guess(gid, Code.from_number(1234))
    assert state.status == "won"
    assert state.turns == 2
    assert state.candidates_left == 1
    assert repo.get_secret(gid) == [1, 2, 3, 4]

def test_repository_rejects_repeated_digits(db_session):
    repo = DBGameStore(db_session)
    with pytest.raises(ValueError):
        repo.create(secret=Code.from_number(1123))

    gid = repo.create(secret=Code.from_number(1234)).game_id
    with pytest.raises(ValueError):
        repo.guess(gid, Code.from_number(1111))

def test_repository_unknown_game(db_session):
    repo = DBGameStore(db_session)
    assert repo.get("missing") is None
    assert repo.guess("missing", Code.from_number(1234)) is None
    assert repo.suggest("missing") == ("not_found", None)
    assert repo.get_secret("missing") is None

def test_suggestion_keeps_the_secret_possible(db_session):
    repo = DBGameStore(db_session)
    secret = Code.from_number(3904)
    gid = repo.create(secret=secret).game_id

    for _ in range(3):
        status, suggestion = repo.suggest(gid)
        if status == "finished":
            break
        assert status == "ok"
        repo.guess(gid, Code(suggestion.guess))

    state = repo.get(gid)
    assert state.candidates_left >= 1
