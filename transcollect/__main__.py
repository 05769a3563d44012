import sys

from transcollect.tools.collect import main

sys.exit(main())
