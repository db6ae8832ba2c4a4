import sys

from credhub.cli.main import main

sys.exit(main())
