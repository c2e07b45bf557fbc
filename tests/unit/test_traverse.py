from collections import Counter
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import pytest

from wikilink_ls.errors import SeedNotFound, UnresolvedReferenceError, VaultIOError, VaultNotFound
from wikilink_ls.io.fs import WalkOptions
from wikilink_ls.pipeline.traverse import MissingRefPolicy, traverse

class FakeResolver:
    """In-memory vault graph: note stem -> raw links. Unknown stems do not resolve."""

    def __init__(self, root: Path, graph: Dict[str, List[str]], attachments=()) -> None:
        self.root = root
        self.graph = graph
        self.attachments = set(attachments)
        self.scans: Counter = Counter()
        self.resolutions = 0

    def list_outbound_links(self, note: Path) -> Iterator[str]:
        self.scans[note.stem] += 1
        yield from self.graph.get(note.stem, [])

    def resolve_link(self, vault_root: Path, source: Path, raw_link: str) -> Optional[Path]:
        self.resolutions += 1
        if raw_link in self.attachments:
            return vault_root / raw_link
        if raw_link in self.graph:
            return vault_root / f"{raw_link}.md"
        return None

def _vault(tmp_path: Path, *names: str) -> Path:
    root = tmp_path.resolve()
    for n in names:
        (root / f"{n}.md").write_text("", encoding="utf-8")
    return root

def _stems(paths) -> set:
    return {p.name for p in paths}

def test_non_recursive_is_seeds_plus_direct_targets(tmp_path: Path) -> None:
    root = _vault(tmp_path, "A")
    fake = FakeResolver(root, {"A": ["B", "C"], "B": ["D"], "C": [], "D": []})
    out = traverse(root, [Path("A.md")], resolver=fake)
    assert _stems(out) == {"A.md", "B.md", "C.md"}
    assert set(fake.scans) == {"A"}

def test_cycle_terminates(tmp_path: Path) -> None:
    root = _vault(tmp_path, "A")
    fake = FakeResolver(root, {"A": ["B"], "B": ["A"]})
    out = traverse(root, [Path("A.md")], recursive=True, resolver=fake)
    assert _stems(out) == {"A.md", "B.md"}
    assert fake.scans == Counter({"A": 1, "B": 1})

def test_diamond_scans_shared_target_once(tmp_path: Path) -> None:
    root = _vault(tmp_path, "A")
    fake = FakeResolver(root, {"A": ["B", "C"], "B": ["D"], "C": ["D"], "D": []})
    out = traverse(root, [Path("A.md")], recursive=True, resolver=fake)
    assert _stems(out) == {"A.md", "B.md", "C.md", "D.md"}
    assert fake.scans["D"] == 1
    assert fake.resolutions == 4

def test_recursive_result_is_closed(tmp_path: Path) -> None:
    graph = {"A": ["B"], "B": ["C", "E"], "C": ["A"], "D": ["A"], "E": []}
    root = _vault(tmp_path, *graph)
    out = traverse(root, [Path("A.md")], recursive=True, resolver=FakeResolver(root, graph))
    assert _stems(out) == {"A.md", "B.md", "C.md", "E.md"}

    again = traverse(root, sorted(out), resolver=FakeResolver(root, graph))
    assert again <= out

def test_seed_also_linked_is_scanned_once(tmp_path: Path) -> None:
    root = _vault(tmp_path, "A", "B")
    fake = FakeResolver(root, {"A": ["B"], "B": ["A"]})
    out = traverse(root, [Path("A.md"), Path("B.md"), Path("A.md")], recursive=True, resolver=fake)
    assert _stems(out) == {"A.md", "B.md"}
    assert fake.scans == Counter({"A": 1, "B": 1})

def test_attachments_are_listed_not_scanned(tmp_path: Path) -> None:
    root = _vault(tmp_path, "A")
    fake = FakeResolver(root, {"A": ["pic.png"]}, attachments=["pic.png"])
    out = traverse(root, [Path("A.md")], recursive=True, resolver=fake)
    assert _stems(out) == {"A.md", "pic.png"}
    assert "pic" not in fake.scans

def test_missing_reference_fails_fast(tmp_path: Path) -> None:
    root = _vault(tmp_path, "A")
    fake = FakeResolver(root, {"A": ["Ghost", "B"], "B": []})
    with pytest.raises(UnresolvedReferenceError) as ei:
        traverse(root, [Path("A.md")], resolver=fake)
    assert ei.value.raw_link == "Ghost"
    assert ei.value.source == root / "A.md"
    # first failure wins
    assert fake.resolutions == 1

def test_missing_reference_warn_and_continue(tmp_path: Path, caplog) -> None:
    root = _vault(tmp_path, "A")
    fake = FakeResolver(root, {"A": ["Ghost", "B"], "B": []})
    out = traverse(
        root, [Path("A.md")],
        on_missing_ref=MissingRefPolicy.WARN_AND_CONTINUE,
        resolver=fake,
    )
    assert _stems(out) == {"A.md", "B.md"}
    assert "skipping unresolved reference 'Ghost'" in caplog.text

def test_missing_seed_fails_before_any_resolution(tmp_path: Path) -> None:
    root = _vault(tmp_path, "A")
    fake = FakeResolver(root, {"A": ["B"], "B": []})
    with pytest.raises(SeedNotFound):
        traverse(root, [Path("A.md"), Path("Nope.md")], resolver=fake)
    assert fake.resolutions == 0
    assert not fake.scans

def test_seed_outside_vault(tmp_path: Path) -> None:
    root = tmp_path.resolve() / "vault"
    root.mkdir()
    outside = tmp_path.resolve() / "outside.md"
    outside.write_text("", encoding="utf-8")
    with pytest.raises(SeedNotFound, match="outside vault_root"):
        traverse(root, [outside], resolver=FakeResolver(root, {}))

def test_vault_root_must_be_a_directory(tmp_path: Path) -> None:
    with pytest.raises(VaultNotFound):
        traverse(tmp_path / "missing", [Path("A.md")], resolver=FakeResolver(tmp_path, {}))

def test_unreadable_note_raises_io_error(tmp_path: Path) -> None:
    class Exploding(FakeResolver):
        def list_outbound_links(self, note: Path) -> Iterator[str]:
            raise VaultIOError(note, PermissionError("denied"))

    root = _vault(tmp_path, "A")
    with pytest.raises(VaultIOError, match="A.md"):
        traverse(root, [Path("A.md")], resolver=Exploding(root, {}))

def test_hidden_seed_is_not_in_vault_scan(tmp_path: Path) -> None:
    root = tmp_path.resolve()
    (root / ".obsidian").mkdir()
    (root / ".obsidian" / "x.md").write_text("", encoding="utf-8")
    fake = FakeResolver(root, {"x": []})
    with pytest.raises(SeedNotFound, match="not found in vault scan"):
        traverse(root, [Path(".obsidian/x.md")], resolver=fake)
    assert not fake.scans

    out = traverse(
        root, [Path(".obsidian/x.md")],
        resolver=fake,
        walk_options=WalkOptions(ignore_hidden=False),
    )
    assert _stems(out) == {"x.md"}
