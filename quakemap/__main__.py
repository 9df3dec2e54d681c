import sys

from quakemap.main import main


sys.exit(main())
