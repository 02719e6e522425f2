"""Integration tests running the full pipeline against a fake publisher."""

import hashlib
import json
import os
import stat
import pytest
import yaml

from cgw_publisher.main import main


FAKE_PUBLISHER = """#!/usr/bin/env bash
# Record arguments and log to stderr like push-cgw-metadata does
printf '%s\\n' "$@" > "{args_file}"
echo "INFO: metadata pushed" >&2
exit {exit_code}
"""


@pytest.fixture
def fake_publisher(tmp_path):
    """Factory writing an executable fake push-cgw-metadata script."""

    def _make(exit_code=0):
        script = tmp_path / "bin" / "push-cgw-metadata"
        script.parent.mkdir(exist_ok=True)
        args_file = tmp_path / "publisher_args.txt"
        script.write_text(FAKE_PUBLISHER.format(args_file=args_file, exit_code=exit_code))
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script, args_file

    return _make


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("CGW_USERNAME", "svc-user")
    monkeypatch.setenv("CGW_TOKEN", "s3cr3t")
    monkeypatch.delenv("CGW_FAIL_ON_PUBLISH_ERROR", raising=False)
    monkeypatch.delenv("CGW_HOSTNAME", raising=False)


@pytest.mark.integration
@pytest.mark.skipif(os.name != "posix", reason="fake publisher is a bash script")
class TestPublishIntegration:
    """Full publish run with a real subprocess."""

    def test_publish_run(self, credentials, fake_publisher, data_file, make_content_dir, tmp_path):
        # Arrange
        script, args_file = fake_publisher()
        content_dir = make_content_dir({
            "cosign-linux-amd64.gz": b"cosign binary",
            "sha256sum.txt.sig": b"signature",
            "randomfile.bin": b"random",
        })
        result_path_file = tmp_path / "resultDataPath"

        # Act
        code = main([
            "--data-path", str(data_file),
            "--content-dir", str(content_dir),
            "--result-path-file", str(result_path_file),
            "--publisher-command", str(script),
        ])

        # Assert
        assert code == 0
        metadata_path = data_file.parent / "cgw_metadata.yaml"
        result_path = data_file.parent / "results.json"
        assert result_path_file.read_text() == str(result_path)
        result = json.loads(result_path.read_text())
        assert result == {
            "no_of_files_processed": 2,
            "metadata_file_path": str(metadata_path),
            "command_output": "INFO: metadata pushed\n",
        }

        assert args_file.read_text().splitlines() == [
            "--CGW_hostname", "https://developers.redhat.com/content-gateway/rest/admin",
            "--CGW_username", "svc-user",
            "--CGW_password", "s3cr3t",
            "--CGW_filepath", str(metadata_path),
        ]

        records = yaml.safe_load(metadata_path.read_text())
        digest = hashlib.sha256(b"cosign binary").hexdigest()
        assert records[0] == {
            "type": "file",
            "action": "create",
            "metadata": {
                "type": "FILE",
                "hidden": True,
                "invisible": False,
                "description": "Red Hat cosign",
                "shortURL": "/cgw/KTP/cosign-linux-amd64.gz",
                "productName": "Konflux test product",
                "productCode": "KTP",
                "productVersionName": "1.2",
                "downloadURL": (
                    f"/content/origin/files/sha256/{digest[:2]}/{digest}/"
                    "cosign-linux-amd64.gz"
                ),
                "label": "cosign-linux-amd64.gz",
            },
        }
        assert records[1]["metadata"]["label"] == "Checksum - Signature"

    def test_publisher_failure_is_reported(
        self, credentials, fake_publisher, data_file, make_content_dir
    ):
        script, _ = fake_publisher(exit_code=1)

        code = main([
            "--data-path", str(data_file),
            "--content-dir", str(make_content_dir({"gitsign": b"g"})),
            "--publisher-command", str(script),
        ])

        assert code == 0
        result = json.loads((data_file.parent / "results.json").read_text())
        assert result["command_output"] == "INFO: metadata pushed\n"

    def test_publisher_failure_fails_task_when_enabled(
        self, credentials, fake_publisher, data_file, make_content_dir
    ):
        script, _ = fake_publisher(exit_code=1)

        code = main([
            "--data-path", str(data_file),
            "--content-dir", str(make_content_dir({"gitsign": b"g"})),
            "--publisher-command", str(script),
            "--fail-on-publish-error",
        ])

        assert code == 1
        assert (data_file.parent / "results.json").exists()

    def test_missing_publisher_fails(self, credentials, data_file, make_content_dir, tmp_path):
        code = main([
            "--data-path", str(data_file),
            "--content-dir", str(make_content_dir({"gitsign": b"g"})),
            "--publisher-command", str(tmp_path / "no-such-publisher"),
        ])

        assert code == 1
        assert not (data_file.parent / "results.json").exists()
