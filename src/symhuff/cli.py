"""symhuff CLI.

This is the stable CLI entrypoint (console-script: ``symhuff``).

UX policy:
  - ``encode``/``decode`` speak JSON (payload + code table), for piping and tests.
  - ``compress``/``decompress`` speak binary containers (see engine.container).
  - Diagnostics go to stderr with the ``[symhuff]`` prefix.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from symhuff.core.codec_huffman import DECODE_STRATEGIES
from symhuff.core.symmetry import PROFILE_LOSSLESS, PROFILES
from symhuff.errors import CorruptPayload, SymhuffError
from symhuff.pipeline_spec import PipelineSpecError, PipelineSpecV1, load_pipeline_spec


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_plan_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--pipeline",
        default=None,
        help=(
            "Pipeline spec (JSON). Use '@file.json' to load from file, or pass JSON inline. "
            "When set, --profile/--decoder are ignored."
        ),
    )
    p.add_argument("--profile", default=PROFILE_LOSSLESS, choices=list(PROFILES))
    p.add_argument("--decoder", default="table", choices=list(DECODE_STRATEGIES))


def _plan(ns: argparse.Namespace) -> PipelineSpecV1:
    if getattr(ns, "pipeline", None) is not None:
        return load_pipeline_spec(str(ns.pipeline))
    return PipelineSpecV1(profile=ns.profile, decoder=ns.decoder)


def _read_text(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _write_text(path: Path | None, text: str) -> None:
    if path is None or str(path) == "-":
        sys.stdout.write(text)
        return
    path.write_text(text, encoding="utf-8")


def _matrix_file_text(text: str) -> str:
    # matrix files are newline-terminated (the empty matrix is an empty file)
    return text + "\n" if text else ""


def _cmd_encode(input_path: Path, output_path: Path | None, plan: PipelineSpecV1) -> int:
    from symhuff.pipeline import encode_matrix_text

    res = encode_matrix_text(_read_text(input_path), plan.profile)
    _write_text(output_path, json.dumps(res.as_dict(), ensure_ascii=False, indent=2) + "\n")
    return 0


def _cmd_decode(input_path: Path, output_path: Path | None, plan: PipelineSpecV1) -> int:
    from symhuff.pipeline import decode_pipeline

    try:
        obj = json.loads(_read_text(input_path))
    except json.JSONDecodeError as e:
        raise CorruptPayload(f"decode: JSON non valido: {e}") from e
    if not isinstance(obj, dict):
        raise CorruptPayload("decode: il JSON deve essere un oggetto")
    payload = obj.get("payload")
    codes = obj.get("codes")
    if not isinstance(payload, str) or not isinstance(codes, dict):
        raise CorruptPayload("decode: servono 'payload' (string) e 'codes' (oggetto)")

    # the profile recorded at encode time wins over the CLI default
    profile = str(obj.get("profile") or plan.profile)
    text = decode_pipeline(payload, {str(k): str(v) for k, v in codes.items()}, profile, plan.decoder)
    _write_text(output_path, _matrix_file_text(text))
    return 0


def _cmd_compress(input_path: Path, output_path: Path, plan: PipelineSpecV1) -> int:
    from symhuff.engine.container import compress_matrix_text

    text = _read_text(input_path)
    blob = compress_matrix_text(text, plan.profile)
    output_path.write_bytes(blob)

    in_size = len(text.encode("utf-8"))
    ratio = (len(blob) / in_size) if in_size else 0.0
    print("=== symhuff container v1 ===")
    print(f"Profilo        : {plan.profile}")
    print(f"File originale : {input_path} ({in_size} byte)")
    print(f"File compresso : {output_path} ({len(blob)} byte)")
    print(f"Rapporto       : {ratio:.3f} (1.0 = nessuna compressione)")
    print("============================")
    return 0


def _cmd_decompress(input_path: Path, output_path: Path, plan: PipelineSpecV1) -> int:
    from symhuff.engine.container import decompress_container

    text = decompress_container(input_path.read_bytes(), strategy=plan.decoder)
    output_path.write_text(_matrix_file_text(text), encoding="utf-8")
    print(f"Decompressione completata: {output_path}")
    return 0


def _cmd_verify(input_path: Path, *, full: bool, plan: PipelineSpecV1) -> int:
    from symhuff.verify import verify_container_file

    c = verify_container_file(input_path, full=full, strategy=plan.decoder)
    if not c.exact:
        print("[symhuff] warning: container lossy (profilo reference)", file=sys.stderr)
    print("OK")
    return 0


def _cmd_inspect(input_path: Path) -> int:
    from symhuff.engine.container import unpack_container

    c = unpack_container(input_path.read_bytes())
    out = {
        "profile": c.profile,
        "kind": c.kind.name.lower(),
        "flag": c.kind.flag,
        "codes": dict(sorted(c.codes.items())),
        "encoded_bits": len(c.bits),
        "sha256": c.sha256,
        "exact": c.exact,
    }
    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0


def _cmd_report(input_path: Path, *, as_json: bool, plan: PipelineSpecV1) -> int:
    from symhuff.report import build_report, render_report

    rep = build_report(_read_text(input_path), plan.profile)
    if as_json:
        print(json.dumps(rep, ensure_ascii=False, indent=2, sort_keys=True))
    else:
        sys.stdout.write(render_report(rep))
    return 0


def _cmd_pipeline_validate(pipeline_arg: str) -> int:
    # load is the validation
    load_pipeline_spec(pipeline_arg)
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="symhuff",
        description="Binary matrix codec: symmetry reduction + Huffman coding",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_e = sub.add_parser("encode", help="Encode a matrix text file to JSON (payload + codes)")
    p_e.add_argument("input", type=Path, help="Matrix text file ('-' for stdin)")
    p_e.add_argument("-o", "--output", type=Path, default=None)
    _add_plan_args(p_e)
    _add_common_args(p_e)

    p_d = sub.add_parser("decode", help="Decode the JSON produced by 'encode'")
    p_d.add_argument("input", type=Path, help="JSON file ('-' for stdin)")
    p_d.add_argument("-o", "--output", type=Path, default=None)
    _add_plan_args(p_d)
    _add_common_args(p_d)

    p_c = sub.add_parser("compress", help="Compress a matrix text file into a binary container")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    _add_plan_args(p_c)
    _add_common_args(p_c)

    p_x = sub.add_parser("decompress", help="Decompress a binary container")
    p_x.add_argument("input", type=Path)
    p_x.add_argument("output", type=Path)
    _add_plan_args(p_x)
    _add_common_args(p_x)

    p_v = sub.add_parser("verify", help="Verify a container file")
    p_v.add_argument("input", type=Path)
    p_v.add_argument("--full", action="store_true", help="Decode and recompute sha256")
    _add_plan_args(p_v)
    _add_common_args(p_v)

    p_i = sub.add_parser("inspect", help="Show a container header as JSON")
    p_i.add_argument("input", type=Path)
    _add_common_args(p_i)

    p_r = sub.add_parser("report", help="Size report vs. zlib/zstd baselines")
    p_r.add_argument("input", type=Path)
    p_r.add_argument("--json", action="store_true", help="Print the report as JSON")
    _add_plan_args(p_r)
    _add_common_args(p_r)

    p_pv = sub.add_parser("pipeline-validate", help="Validate a pipeline spec (v1)")
    p_pv.add_argument("pipeline", help="Pipeline spec JSON (@file.json or inline JSON)")
    _add_common_args(p_pv)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "pipeline-validate":
            return _cmd_pipeline_validate(str(ns.pipeline))
        if ns.cmd == "inspect":
            return _cmd_inspect(ns.input)

        plan = _plan(ns)
        if ns.cmd == "encode":
            return _cmd_encode(ns.input, ns.output, plan)
        if ns.cmd == "decode":
            return _cmd_decode(ns.input, ns.output, plan)
        if ns.cmd == "compress":
            return _cmd_compress(ns.input, ns.output, plan)
        if ns.cmd == "decompress":
            return _cmd_decompress(ns.input, ns.output, plan)
        if ns.cmd == "verify":
            return _cmd_verify(ns.input, full=bool(ns.full), plan=plan)
        if ns.cmd == "report":
            return _cmd_report(ns.input, as_json=bool(ns.json), plan=plan)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except PipelineSpecError as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        print(f"[symhuff] {e}", file=sys.stderr)
        return 2
    except SymhuffError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[symhuff] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", 10) or 10)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[symhuff] error: {e}", file=sys.stderr)
        return 10


if __name__ == "__main__":
    raise SystemExit(main())
