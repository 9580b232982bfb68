import sys

import atheris

with atheris.instrument_imports():
    # We instrument `test_utils` as well, so it doesn't block coverage analysis in Fuzz Introspector:
    from test_utils import EnhancedFuzzedDataProvider

    from patchseries.patch import DIFF_POLICIES, HEADER_RE, parse_patch


def TestOneInput(data):
    fdp = EnhancedFuzzedDataProvider(data)
    lines = [fdp.ConsumePatchLine() for _ in range(fdp.ConsumeIntInRange(0, 64))]
    text = "\n".join(lines)

    headers = [HEADER_RE.match(line).group(1) for line in lines if HEADER_RE.match(line)]
    for policy in DIFF_POLICIES:
        commits = parse_patch(text, policy)
        assert [commit.sha for commit in commits] == headers


def main():
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
