#!/usr/bin/python
# Example comparing the diffs captured by the strict and permissive policies

import sys
from io import BytesIO

from patchseries.patch import DIFF_POLICY_PERMISSIVE, DIFF_POLICY_STRICT, read_patch

if len(sys.argv) < 2:
    print(f"usage: {sys.argv[0]} patchfile")
    sys.exit(1)

with open(sys.argv[1], "rb") as f:
    data = f.read()

for policy in (DIFF_POLICY_STRICT, DIFF_POLICY_PERMISSIVE):
    commits = read_patch(BytesIO(data), diff_policy=policy)
    print(f"{policy}:")
    for commit in commits:
        print(f"  {commit.sha[:7]} {len(commit.diff.splitlines())} diff lines")
