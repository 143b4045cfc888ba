"""Attach to a running process and inspect its mapped regions.

This is the "bring your own process" pattern: start any program, then
point this script at its pid.  Needs permission to read
``/proc/<pid>/mem`` (same user and a permissive ``ptrace_scope``, or root).
"""

import sys

from memio.core import attach


def main():
    if len(sys.argv) < 2:
        print("Usage: python attach_and_inspect.py <pid>")
        print("  python attach_and_inspect.py 12345")
        print("  python attach_and_inspect.py self")
        sys.exit(1)

    process = attach(sys.argv[1])
    print(f"Attached: {process!r}")

    # Every named mapping, lowest address first
    for name, base in sorted(process.bases.items(), key=lambda item: item[1]):
        print(f"  {base:#018x}  {name}")

    # The ELF header of the main executable is usually the first mapping
    first = min(process.bases.items(), key=lambda item: item[1])[0]
    magic = process.read(first, 4)
    print(f"\nFirst 4 bytes of {first}: {magic!r}")

    if "heap" in process.bases:
        words = process.read("heap", 4, as_="u64")
        print("First heap words: " + ", ".join(f"{w:#x}" for w in words))


if __name__ == "__main__":
    main()
