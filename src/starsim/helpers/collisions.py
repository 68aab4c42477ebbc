"""
Driver side collision handling.

The physics core only knows how to merge one body into another
(`Body.collide`). Deciding which bodies touch and dropping the absorbed ones
from the simulated set happens here, between steps.
"""
from typing import List, Sequence, Set, Tuple

from loguru import logger

from starsim.helpers.body import Body


def merge_close_bodies(bodies: Sequence[Body], distance: float) -> Tuple[List[Body], List[Tuple[Body, Body]]]:
    """
    Merge every pair of bodies closer than `distance`.

    The heavier body absorbs the lighter one (the earlier one on equal mass)
    and the absorbed body loses its trail. Pairs are checked in collection
    order against positions as they are after the merges so far.

    Returns the surviving bodies in their original order and the
    (absorber, absorbed) pairs that were merged.
    """
    bodies = list(bodies)
    if distance <= 0 or len(bodies) < 2:
        return bodies, []

    removed: Set[int] = set()
    merged: List[Tuple[Body, Body]] = []

    n = len(bodies)
    for i in range(n):
        if i in removed:
            continue
        for j in range(i + 1, n):
            if j in removed:
                continue
            bi, bj = bodies[i], bodies[j]
            separation, _ = bi.distance_to(bj)
            if separation >= distance:
                continue

            if bj.mass > bi.mass:
                absorber, absorbed, absorbed_index = bj, bi, i
            else:
                absorber, absorbed, absorbed_index = bi, bj, j

            absorber.collide(absorbed)
            absorbed.clear_history()
            removed.add(absorbed_index)
            merged.append((absorber, absorbed))
            logger.debug(f'Merged body {absorbed.generation}.{absorbed.id} into {absorber.generation}.{absorber.id}')
            if absorbed_index == i:
                break

    survivors = [body for index, body in enumerate(bodies) if index not in removed]
    return survivors, merged
