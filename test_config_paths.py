import json
import tempfile
from pathlib import Path

import config_paths


def test_load_config_defaults_without_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "tabledit"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        orig_dir = config_paths.CONFIG_DIR
        orig_json = config_paths.CONFIG_JSON
        try:
            config_paths.CONFIG_DIR = str(cfg_dir)
            config_paths.CONFIG_JSON = str(cfg_dir / "config.json")
            cfg = config_paths.load_config()
            assert cfg["FETCH_URL"] == "http://localhost:8080/data"
            assert cfg["PERSIST_URL"] == "http://localhost:8000/updateTable"
            assert cfg["TIMEOUT_SECONDS"] == 10
            assert cfg["LOG_LEVEL"] == "INFO"
            assert cfg["UNDO_MAX_DEPTH"] == 50
        finally:
            config_paths.CONFIG_DIR = orig_dir
            config_paths.CONFIG_JSON = orig_json


def test_load_config_reads_json_overrides():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "tabledit"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        cfg_path = cfg_dir / "config.json"
        cfg_path.write_text(
            json.dumps(
                {
                    "fetch_url": "https://tables.example/data",
                    "persist_url": " https://tables.example/update ",
                    "timeout_seconds": 2.5,
                    "log_level": "debug",
                    "undo_max_depth": 5,
                }
            )
        )

        orig_json = config_paths.CONFIG_JSON
        try:
            config_paths.CONFIG_JSON = str(cfg_path)
            cfg = config_paths.load_config()
            assert cfg["FETCH_URL"] == "https://tables.example/data"
            assert cfg["PERSIST_URL"] == "https://tables.example/update"
            assert cfg["TIMEOUT_SECONDS"] == 2.5
            assert cfg["LOG_LEVEL"] == "DEBUG"
            assert cfg["UNDO_MAX_DEPTH"] == 5
        finally:
            config_paths.CONFIG_JSON = orig_json


def test_load_config_ignores_bad_values():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_path = Path(tmp) / "config.json"
        cfg_path.write_text(
            json.dumps(
                {
                    "fetch_url": 12,
                    "timeout_seconds": -1,
                    "log_level": "loud",
                    "undo_max_depth": True,
                }
            )
        )

        orig_json = config_paths.CONFIG_JSON
        try:
            config_paths.CONFIG_JSON = str(cfg_path)
            cfg = config_paths.load_config()
            assert cfg["FETCH_URL"] == config_paths.FETCH_URL_DEFAULT
            assert cfg["TIMEOUT_SECONDS"] == config_paths.TIMEOUT_SECONDS_DEFAULT
            assert cfg["LOG_LEVEL"] == config_paths.LOG_LEVEL_DEFAULT
            assert cfg["UNDO_MAX_DEPTH"] == config_paths.UNDO_MAX_DEPTH_DEFAULT
        finally:
            config_paths.CONFIG_JSON = orig_json


def test_load_config_survives_broken_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_path = Path(tmp) / "config.json"
        cfg_path.write_text("{not json")

        orig_json = config_paths.CONFIG_JSON
        try:
            config_paths.CONFIG_JSON = str(cfg_path)
            cfg = config_paths.load_config()
            assert cfg["FETCH_URL"] == config_paths.FETCH_URL_DEFAULT
        finally:
            config_paths.CONFIG_JSON = orig_json
