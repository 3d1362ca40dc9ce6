import sys

from reviewflow.main import main

sys.exit(main())
