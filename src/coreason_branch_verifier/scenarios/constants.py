OWNER = "sima-claw-bot"
REPO = "msbuild"

MAIN_BRANCH = "main"
SECONDARY_MAIN_BRANCH = "secondary-main"
SECONDARY_MAIN_SHA = "dce7f33d3e54a7626be7b1e50132e9fa0ab8f52b"
SECONDARY_MAIN_SHA_PREFIX = "dce7f33d"

FEATURE_BRANCH = "fix/issue-13217-roslyn-codetaskfactory-references"
FEATURE_BRANCH_PREFIX = "fix/"
ISSUE_REFERENCE = "issue-13217"
ISSUE_NUMBER = "13217"

README_FILE = "readme.md"
GITIGNORE_FILE = ".gitignore"
IGNORED_CLONE_DIR = "msbuild-repo"
