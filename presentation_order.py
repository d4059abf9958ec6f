from typing import Iterable, Sequence, TypeVar

T = TypeVar("T")


def _index_of_name(params: Sequence, name: str) -> int:
    for i, param in enumerate(params):
        if param.name == name:
            return i
    return -1


def reorder_parameters(params: Iterable[T], target_name: str, group_names: Iterable[str]) -> list[T]:
    """Return a copy with the target parameter moved right before the earliest group member.

    Unchanged (but still copied) when the target or every group member is missing.
    """
    ordered = list(params)

    target_index = _index_of_name(ordered, target_name)
    group_indices = [i for i in (_index_of_name(ordered, name) for name in group_names) if i >= 0]
    if target_index < 0 or not group_indices:
        return ordered

    insert_before = min(group_indices)
    target = ordered.pop(target_index)
    if target_index < insert_before:
        insert_before -= 1
    ordered.insert(insert_before, target)
    return ordered
