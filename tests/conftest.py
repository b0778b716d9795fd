"""Configure tests."""

import gzip
import io
import tarfile

import httpx
import orjson
import pytest

from wordlistctl.config import Settings
from wordlistctl.domain.models import CatalogEntry
from wordlistctl.domain.services import CatalogIndex

ROCKYOU_CONTENT = b"123456\npassword\n12345678\nqwerty\n"
MIRROR = "https://mirror.test/wordlists"


def build_tar(
    files: dict[str, bytes], mtime: int = 1_600_000_000, compress: bool = True
) -> bytes:
    """Build a tar, gzip-wrapped unless compress is False, of regular files."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz" if compress else "w") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(content)
            info.mode = 0o644
            info.mtime = mtime
            tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


def build_gzip(content: bytes, filename: str | None = None) -> bytes:
    """Gzip content, recording filename in the header when given."""
    buffer = io.BytesIO()
    with gzip.GzipFile(filename=filename or "", mode="wb", fileobj=buffer, mtime=0) as gz:
        gz.write(content)
    return buffer.getvalue()


def dump_catalog(entries: list[CatalogEntry], path) -> None:
    """Write entries to path in the catalog's nested JSON form."""
    payload = [
        {
            "name": entry.name,
            "info": {
                "url": entry.url,
                "group": entry.group,
                "size": entry.size,
                "updated": entry.updated,
            },
        }
        for entry in entries
    ]
    path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2) + b"\n")


@pytest.fixture
def make_tar():
    """Expose the tar builder to tests."""
    return build_tar


@pytest.fixture
def make_gzip():
    """Expose the gzip builder to tests."""
    return build_gzip


@pytest.fixture
def write_catalog():
    """Expose the catalog writer to tests."""
    return dump_catalog


@pytest.fixture
def rockyou_content():
    """Plain-text payload inside the rockyou archive."""
    return ROCKYOU_CONTENT


@pytest.fixture
def sample_entries():
    """Create sample catalog entries across two groups."""
    return [
        CatalogEntry(
            name="rockyou",
            url=f"{MIRROR}/rockyou.txt.tar.gz",
            group="passwords",
            size="133 MB",
            updated="2020-01-01",
        ),
        CatalogEntry(
            name="top-usernames",
            url=f"{MIRROR}/top-usernames.txt.gz",
            group="usernames",
            size="1 KB",
            updated="2021-03-04",
        ),
        CatalogEntry(
            name="darkweb2017",
            url=f"{MIRROR}/darkweb2017.txt",
            group="passwords",
            size="80 KB",
            updated="2019-07-07",
        ),
        CatalogEntry(
            name="names",
            url=f"{MIRROR}/names.tar.gz",
            group="usernames",
            size="10 KB",
            updated="2018-05-06",
        ),
    ]


@pytest.fixture
def sample_index(sample_entries):
    """Create an index over the sample entries."""
    return CatalogIndex(sample_entries)


@pytest.fixture
def catalog_file(tmp_path, sample_entries):
    """Write the sample entries to an archive.json."""
    path = tmp_path / "archive.json"
    dump_catalog(sample_entries, path)
    return path


@pytest.fixture
def settings(tmp_path, catalog_file):
    """Settings pointing every directory into tmp_path."""
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    return Settings(
        catalog_file=catalog_file,
        base_dir=tmp_path / "wordlists",
        temp_dir=temp_dir,
    )


@pytest.fixture
def archive_payloads():
    """Bodies served for the sample entries."""
    return {
        f"{MIRROR}/rockyou.txt.tar.gz": build_tar({"rockyou.txt": ROCKYOU_CONTENT}),
        f"{MIRROR}/top-usernames.txt.gz": build_gzip(b"root\nadmin\n", "top-usernames.txt"),
        f"{MIRROR}/darkweb2017.txt": b"letmein\n",
        f"{MIRROR}/names.tar.gz": build_tar({"names/names.txt": b"alice\nbob\n"}),
    }


@pytest.fixture
def mock_http():
    """Factory for an httpx client served from a URL -> body mapping.

    A body may be bytes (200), an int (bare status) or an exception to raise.
    Requested URLs are recorded on ``factory.requests``.
    """
    seen: list[str] = []

    def factory(routes: dict) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            seen.append(url)
            body = routes.get(url)
            if body is None:
                return httpx.Response(404, content=b"not found")
            if isinstance(body, Exception):
                raise body
            if isinstance(body, int):
                return httpx.Response(body)
            return httpx.Response(200, content=body)

        return httpx.Client(transport=httpx.MockTransport(handler))

    factory.requests = seen
    return factory
