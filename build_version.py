# build_version.py
# Writes version.py from git metadata. Run standalone before packaging, or
# let main.py call version_info() at startup.

import subprocess
from datetime import datetime, timezone

APP_NAME = "VDRM Emulator Viewer"


def _git(*args, default="unknown"):
    try:
        out = subprocess.run(["git", *args], capture_output=True, text=True, check=True).stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return default
    return out or default


def _git_info():
    return {
        "APP_NAME": APP_NAME,
        "VERSION": _git("describe", "--tags", "--abbrev=0", default="dev"),
        "GIT_COMMIT": _git("rev-parse", "--short", "HEAD"),
        "BUILD_DATE": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
    }


def version_info():
    try:
        import version as V
        return {
            "APP_NAME": V.APP_NAME,
            "VERSION": V.VERSION,
            "GIT_COMMIT": V.GIT_COMMIT,
            "BUILD_DATE": V.BUILD_DATE,
        }
    except ImportError:
        pass
    return _git_info()


def write_version_file(path="version.py"):
    info = _git_info()
    with open(path, "w") as f:
        for key, value in info.items():
            f.write(f'{key} = "{value}"\n')
    return info


if __name__ == "__main__":
    info = write_version_file()
    for key, value in info.items():
        print(f"{key}: {value}")
    print("version.py written successfully.")
