#!/usr/bin/python
# Example printing the commits of a patch series grouped by author

import sys
from collections import defaultdict

from patchseries import porcelain

if len(sys.argv) < 2:
    print(f"usage: {sys.argv[0]} patchfile|url")
    sys.exit(1)

by_author = defaultdict(list)
for commit in porcelain.parse(sys.argv[1]):
    by_author[commit.author].append(commit)

for author, commits in sorted(by_author.items()):
    print(f"{author} ({len(commits)})")
    for commit in commits:
        print(f"    {commit.sha[:7]} {commit.subject}")
