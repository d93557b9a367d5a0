"""Client script bundling and minification.

Both steps are delegated to an external tool.  The build only depends
on the two small protocols below; the default implementations shell
out to the ``esbuild`` binary.
"""

import logging
import subprocess
from pathlib import Path
from typing import Protocol

import anyio

logger = logging.getLogger("sprout.build")


class AssetError(Exception):
    """The external bundler or minifier failed."""


class Bundler(Protocol):
    """Compile a module graph, starting at *entry*, into one script."""

    async def bundle(self, entry: Path) -> str: ...


class Minifier(Protocol):
    """Minify the script at *source*, writing the result to *output*."""

    async def minify(self, source: Path, output: Path) -> None: ...


class EsbuildBundler:
    """Bundle with ``esbuild --bundle --format=esm``; output is read from stdout."""

    __slots__ = ("_binary",)

    def __init__(self, binary: str = "esbuild") -> None:
        self._binary = binary

    async def bundle(self, entry: Path) -> str:
        result = await _run([self._binary, str(entry), "--bundle", "--format=esm"])
        return result.stdout.decode("utf-8")


class EsbuildMinifier:
    """Minify with ``esbuild --minify --outfile=<output>``."""

    __slots__ = ("_binary",)

    def __init__(self, binary: str = "esbuild") -> None:
        self._binary = binary

    async def minify(self, source: Path, output: Path) -> None:
        await _run([self._binary, str(source), "--minify", f"--outfile={output}"])


async def _run(command: list[str]) -> subprocess.CompletedProcess[bytes]:
    logger.debug("Running %s", " ".join(command))
    try:
        return await anyio.run_process(command, check=True)
    except FileNotFoundError as exc:
        msg = f"{command[0]!r} not found; install esbuild or set esbuild_binary"
        raise AssetError(msg) from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or b"").decode("utf-8", errors="replace").strip()
        msg = f"{command[0]} exited with status {exc.returncode}: {stderr}"
        raise AssetError(msg) from exc
