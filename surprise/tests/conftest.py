"""
Pytest fixtures for Surprise tests.
"""

import random

import pytest

from ..config import SurpriseConfig
from ..engine_core.state import Category, Container, GamePhase, GameState, Prize
from ..persistence import JsonFileStore
from ..session import GameSession, SessionManager


# 4 Novice, 4 Intermediate, 4 Elite, 3 Prestige, 1 Legendary
SHOW_PRIZES = [
    ("Keychain", 5, Category.NOVICE),
    ("Mug", 10, Category.NOVICE),
    ("Notebook", 15, Category.NOVICE),
    ("Umbrella", 25, Category.NOVICE),
    ("Headphones", 60, Category.INTERMEDIATE),
    ("Backpack", 80, Category.INTERMEDIATE),
    ("Smartwatch", 150, Category.INTERMEDIATE),
    ("Speaker", 200, Category.INTERMEDIATE),
    ("Tablet", 400, Category.ELITE),
    ("Camera", 600, Category.ELITE),
    ("Game console", 700, Category.ELITE),
    ("Laptop", 1200, Category.ELITE),
    ("Weekend trip", 2000, Category.PRESTIGE),
    ("E-bike", 3000, Category.PRESTIGE),
    ("Home cinema", 4000, Category.PRESTIGE),
    ("Car", 25000, Category.LEGENDARY),
]


def fill_catalog(session: GameSession, prizes=SHOW_PRIZES):
    for name, value, category in prizes:
        session.add_prize(name, value, category)


def legendary_of(session: GameSession) -> Prize:
    return next(p for p in session.catalog if p.category == Category.LEGENDARY)


def build_state(categories, held=None, opened=(), round_index=0, opened_in_round=0) -> GameState:
    """
    Hand-built PLAYING state: container i+1 holds prize "p{i+1}" of categories[i].
    """
    containers = []
    for i, category in enumerate(categories):
        container_id = i + 1
        containers.append(Container(
            id=container_id,
            prize=Prize(id=f"p{container_id}", name=f"Prize {container_id}", value=container_id, category=category),
            is_open=container_id in opened,
            is_held=container_id == held,
        ))
    return GameState(
        phase=GamePhase.PLAYING,
        containers=containers,
        current_round_index=round_index,
        cases_opened_in_current_round=opened_in_round,
    )


@pytest.fixture
def session() -> GameSession:
    """Seeded session with the full 16-prize catalog, in SETUP."""
    s = GameSession(rng=random.Random(1234))
    fill_catalog(s)
    return s


@pytest.fixture
def picking_session(session: GameSession) -> GameSession:
    """Session waiting for the participant to pick their case."""
    session.start_game()
    session.confirm_rules()
    assert session.phase == GamePhase.PICK_OWN
    return session


@pytest.fixture
def config(tmp_path) -> SurpriseConfig:
    return SurpriseConfig(state_path=tmp_path / "state.json", seed=99)


@pytest.fixture
def manager(config) -> SessionManager:
    return SessionManager(config, store=JsonFileStore(config.state_path))
