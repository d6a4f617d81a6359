from __future__ import annotations

import hashlib
import json
import platform
import subprocess
import sys
from datetime import datetime, timezone
from importlib import metadata
from pathlib import Path
from typing import Dict, Iterable, Optional


RUNTIME_PACKAGES = ["numpy", "pandas", "scikit-learn", "matplotlib", "joblib"]


def write_json(path: Path, payload: dict) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True, default=str), encoding="utf-8")


def sha256_file(path: Path, chunk_size: int = 1024 * 1024) -> str:
    h = hashlib.sha256()
    with Path(path).open("rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            h.update(chunk)
    return h.hexdigest()


def resolve_git_commit(root: Path) -> str:
    try:
        proc = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=root,
            check=True,
            capture_output=True,
            text=True,
        )
        return proc.stdout.strip() or "no_vcs"
    except (OSError, subprocess.CalledProcessError):
        return "no_vcs"


def package_versions(packages: Iterable[str] = RUNTIME_PACKAGES) -> Dict[str, Optional[str]]:
    out: Dict[str, Optional[str]] = {}
    for pkg in packages:
        try:
            out[pkg] = metadata.version(pkg)
        except metadata.PackageNotFoundError:
            out[pkg] = None
    return out


def run_metadata(
    input_path: Path,
    output_dir: Path,
    protocol: dict,
    results: dict,
    artifacts: Dict[str, str],
    project_root: Optional[Path] = None,
) -> dict:
    """Run-level provenance record written next to the modeling artifacts."""

    return {
        "input": {
            "path": str(input_path),
            "sha256": sha256_file(input_path),
        },
        "output_dir": str(output_dir),
        "protocol": protocol,
        "results": results,
        "artifacts": artifacts,
        "runtime": {
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            "python_version": sys.version,
            "platform": platform.platform(),
            "argv": sys.argv,
            "packages": package_versions(),
            "git_commit": resolve_git_commit(project_root) if project_root is not None else "no_vcs",
        },
    }
