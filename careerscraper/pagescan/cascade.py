from __future__ import annotations
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar
import logging

from bs4 import Tag

from .dom import PageSnapshot
from .profiles import Profile, SelectorStrategy

logger = logging.getLogger(__name__)

S = TypeVar('S')
T = TypeVar('T')


def first_non_empty(steps: Iterable[S], run: Callable[[S], Sequence[T]]) -> Tuple[Optional[S], List[T]]:
    """Run steps in order and return the first one producing anything.

    Later steps are never evaluated once a step yields at least one item.
    """
    for step in steps:
        found = run(step)
        if found:
            return step, list(found)
    return None, []


def select_candidates(snapshot: PageSnapshot, strategy: SelectorStrategy) -> List[Tag]:
    matched = snapshot.select(strategy.selector)
    if strategy.descend is None:
        return matched
    out: List[Tag] = []
    for node in matched:
        child = snapshot.select_one(strategy.descend, scope=node)
        if child is not None:
            out.append(child)
    return out


def discover(snapshot: PageSnapshot, profile: Profile) -> Tuple[Optional[SelectorStrategy], List[Tag]]:
    winner, candidates = first_non_empty(profile.strategies, lambda s: select_candidates(snapshot, s))
    if winner is None:
        logger.info(f"[{profile.name}] no strategy matched any element")
    else:
        logger.info(f"[{profile.name}] strategy '{winner.describe()}' matched {len(candidates)} candidates")
    return winner, candidates
