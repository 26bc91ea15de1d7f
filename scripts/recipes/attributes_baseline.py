WORKSPACE = "basics"
ATTRIBUTES_FILE = "user.attributes"

BASELINE_PATHS = [
    " d ",
    "e",
    "e\"",
    "a/i",
    "onoff",
    "offon",
    "no",
    "A/e/F",
    "a/g",
    "a/b/g",
    "a/b/h",
    "a/b/d/ANY",
    "a/b/d/yes",
    "global",
]

def setup(fs, git):
    git("init")

    # layout follows git's own t0003-attributes.sh
    fs.mkdirs("a/b/d", "a/c", "b")

    fs.write_lines(".gitattributes",
        "[attr]notest !test",
        "\" d \"\ttest=d",
        " e\ttest=e",
        " e\"\ttest=e",
        "f\ttest=f",
        "a/i test=a/i",
        "onoff test -test",
        "offon -test test",
        "no notest",
        "A/e/F test=A/e/F",
    )
    fs.write_lines("a/.gitattributes",
        "g test=a/g",
        "b/g test=a/b/g",
    )
    fs.write_lines("a/b/.gitattributes",
        "h test=a/b/h",
        "d/* test=a/b/d/*",
        "d/yes notest",
    )
    fs.write_lines(ATTRIBUTES_FILE,
        "global test=global",
    )

    git("add .")
    git("commit -qm c1")

def run_git(baseline):
    for path in BASELINE_PATHS:
        baseline(path)
