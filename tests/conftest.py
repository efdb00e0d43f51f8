"""
Shared fixtures: synthetic directory trees with files of known sizes.
"""
from pathlib import Path

import pytest


def make_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    return path


@pytest.fixture
def sample_tree(tmp_path):
    """
    root/
        a.bin            5
        b.bin            3000
        $hidden.bin      999999
        $sysdir/big.bin  10000000
        sub1/c.bin       2000000
        sub1/d.bin       10
        sub1/deep/e.bin  50
        sub2/f.bin       700
        empty/
    """
    root = tmp_path / "root"
    make_file(root / "a.bin", 5)
    make_file(root / "b.bin", 3000)
    make_file(root / "$hidden.bin", 999999)
    make_file(root / "$sysdir" / "big.bin", 10_000_000)
    make_file(root / "sub1" / "c.bin", 2_000_000)
    make_file(root / "sub1" / "d.bin", 10)
    make_file(root / "sub1" / "deep" / "e.bin", 50)
    make_file(root / "sub2" / "f.bin", 700)
    (root / "empty").mkdir()
    return root


@pytest.fixture
def wide_tree(tmp_path):
    """Three levels, many sibling directories, several equal sizes."""
    root = tmp_path / "wide"
    for i in range(12):
        for j in range(4):
            make_file(root / f"d{i:02d}" / f"f{j}.dat", (i * 37 + j * 11) % 50 * 100)
        make_file(root / f"d{i:02d}" / "inner" / "same.dat", 4096)
    make_file(root / "top.dat", 123456)
    return root
