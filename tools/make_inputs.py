import hashlib
import json
import random
from pathlib import Path

# Sizes chosen to straddle typical small segment caps (1K, 4K)
DEFAULT_SIZES = [0, 1, 1000, 1024, 4096, 70_000]


def generate_inputs(output_dir: str, sizes: list[int] | None = None, seed: int = 0) -> list[Path]:
    rng = random.Random(seed)
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    paths: list[Path] = []
    index = {}
    for i, size in enumerate(sizes if sizes is not None else DEFAULT_SIZES):
        p = out / f"input-{i:02d}-{size}.bin"
        data = bytes(rng.getrandbits(8) for _ in range(size))
        p.write_bytes(data)
        paths.append(p)
        index[p.name] = {"size": size, "sha256": hashlib.sha256(data).hexdigest()}

    # Expected content digests, for comparing after a round trip
    (out / "index.json").write_text(json.dumps(index, indent=2, sort_keys=True) + "\n", encoding="utf-8")

    print(f"GENERATED: {len(paths)} files in {out}")
    return paths


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/make_inputs.py OUT_DIR [--seed N] [SIZE ...]

    args = [a for a in sys.argv[1:] if a]

    seed = 0
    if "--seed" in args:
        i = args.index("--seed")
        if i + 1 >= len(args):
            raise SystemExit("--seed requires a value")
        seed = int(args[i + 1])
        args = args[:i] + args[i + 2:]

    out = args[0] if len(args) > 0 else "sample_inputs"
    sizes = [int(a) for a in args[1:]] or None
    generate_inputs(out, sizes, seed=seed)
