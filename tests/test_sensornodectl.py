"""Tests for the sensornodectl command line."""

import json

from typer.testing import CliRunner

from sensornode.sensornodectl import app

runner = CliRunner()


def test_families_lists_tables() -> None:
    result = runner.invoke(app, ["families"])

    assert result.exit_code == 0
    assert "ad-node" in result.stdout
    assert "s-node" in result.stdout


def test_decode_prints_nested_json() -> None:
    result = runner.invoke(app, ["decode", "s-node", "100", "4869"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "data": [
            {"label": "packet-type", "channelId": 0, "value": "DOWNLINK_RESPONSE"},
            {"label": "downlink-response", "channelId": 0, "value": "Hi"},
        ]
    }


def test_decode_flat_from_option_and_envvar() -> None:
    args = ["decode", "mfr-node-r3", "1", "10 10 00 01 70 F4 0F B0 4E 72 00 00 00 00"]

    by_option = runner.invoke(app, args + ["--output-type", "flat"])
    by_env = runner.invoke(app, args, env={"SENSORNODE_OUTPUT_TYPE": "flat"})

    assert by_option.exit_code == 0
    assert json.loads(by_option.stdout) == {
        "packet-type": "DATA_PACKET",
        "header": 10,
        "uptime_s": 94452,
        "battery-voltage_V": 4.016,
        "solar-voltage_V": 20.082,
    }
    assert json.loads(by_env.stdout) == json.loads(by_option.stdout)


def test_decode_raw_payload_is_json_list() -> None:
    result = runner.invoke(app, ["decode", "s-node", "9", "0x0102"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"][1]["value"] == [1, 2]


def test_decode_table_view() -> None:
    result = runner.invoke(app, ["decode", "lvl-node", "1", "00000000000004D2", "--table"])

    assert result.exit_code == 0
    assert "distance" in result.stdout
    assert "1234" in result.stdout


def test_decode_rejects_bad_input() -> None:
    assert runner.invoke(app, ["decode", "s-node", "1", "abc"]).exit_code == 2
    assert runner.invoke(app, ["decode", "s-node", "1", "zz"]).exit_code == 2
    assert runner.invoke(app, ["decode", "q-node", "1", "00"]).exit_code == 2


def test_uplinks_decode_writes_jsonl(tmp_path) -> None:
    infile = tmp_path / "uplinks.ndjson"
    infile.write_text(
        "\n".join(
            [
                json.dumps({"time": "t0", "deviceInfo": {"devEui": "01"}, "fPort": 100, "data": "SGk="}),
                json.dumps({"time": "t1", "deviceInfo": {"devEui": "01"}, "fPort": 77, "data": "AQ=="}),
            ]
        ),
        encoding="utf-8",
    )
    outfile = tmp_path / "out" / "decoded.jsonl"

    result = runner.invoke(
        app, ["uplinks", "decode", str(infile), "--family", "ad-node", "--out", str(outfile), "-t", "flat"]
    )

    assert result.exit_code == 0
    rows = [json.loads(line) for line in outfile.read_text(encoding="utf-8").splitlines()]
    assert rows == [
        {
            "ts": "t0",
            "dev_eui": "01",
            "f_port": 100,
            "decoded": {"packet-type": "DOWNLINK_RESPONSE", "downlink-response": "Hi"},
        },
        {"ts": "t1", "dev_eui": "01", "f_port": 77, "decoded": {"packet-type": "UNKNOWN_RESPONSE"}},
    ]


def test_uplinks_decode_unknown_family(tmp_path) -> None:
    infile = tmp_path / "uplinks.json"
    infile.write_text("[]", encoding="utf-8")

    result = runner.invoke(app, ["uplinks", "decode", str(infile), "--family", "q-node"])

    assert result.exit_code == 2


def test_uplinks_peek(tmp_path) -> None:
    infile = tmp_path / "uplinks.json"
    infile.write_text(json.dumps([{"port": 1, "hex": "0a000000"}, {"port": 10, "hex": "00"}]), encoding="utf-8")

    result = runner.invoke(app, ["uplinks", "peek", str(infile), "-n", "1"])

    assert result.exit_code == 0
    assert "0a000000" in result.stdout
