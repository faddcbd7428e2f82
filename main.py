import sys
from mojang_auth_checker.cli import main

if __name__ == "__main__":
    sys.exit(main())
