import sys

from url_throttle.main import main

sys.exit(main())
