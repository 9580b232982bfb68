import sys

import atheris

with atheris.instrument_imports():
    # We instrument `test_utils` as well, so it doesn't block coverage analysis in Fuzz Introspector:
    from test_utils import EnhancedFuzzedDataProvider

    from patchseries.mbox import split_series
    from patchseries.patch import parse_patch


def TestOneInput(data):
    fdp = EnhancedFuzzedDataProvider(data)
    lines = [fdp.ConsumePatchLine() for _ in range(fdp.ConsumeIntInRange(0, 64))]
    text = "\n".join(lines) + "\n"

    commits = parse_patch(text)
    split_commits = [
        commit for block in split_series(text) for commit in parse_patch(block)
    ]
    assert commits == split_commits


def main():
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
