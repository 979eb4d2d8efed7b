from typing import Iterable, Optional, Sequence

from chaptersync.models.history import History
from chaptersync.models.title import Chapter


def list_branches(chapters: Optional[Sequence[Chapter]]) -> list[tuple[Optional[str], int]]:
    """Branches of ``chapters`` with their chapter counts, in order of first appearance."""
    counts: dict[Optional[str], int] = {}
    for chapter in chapters or ():
        counts[chapter.branch] = counts.get(chapter.branch, 0) + 1
    return list(counts.items())


def _matches_language(branch: Optional[str], language: str) -> bool:
    return branch is not None and language.casefold() in branch.casefold()


def select_branch(
    chapters: Optional[Sequence[Chapter]],
    history: Optional[History],
    languages: Iterable[str] = (),
) -> Optional[str]:
    """Pick the branch to show by default.

    The branch of the last read chapter wins. Without usable history the
    branch with the most chapters is chosen, restricted to branches naming
    one of ``languages`` when any does. Ties go to the branch seen first.
    """
    if not chapters:
        return None
    if history is not None:
        for chapter in chapters:
            if chapter.id == history.chapter_id:
                return chapter.branch

    groups = list_branches(chapters)
    if len(groups) == 1:
        return groups[0][0]

    candidates = []
    for language in languages:
        candidates = [group for group in groups if _matches_language(group[0], language)]
        if candidates:
            break
    if not candidates:
        candidates = groups

    best_branch, best_count = candidates[0]
    for branch, count in candidates[1:]:
        if count > best_count:
            best_branch, best_count = branch, count
    return best_branch
