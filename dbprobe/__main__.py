import sys

from dbprobe.main import main

sys.exit(main())
