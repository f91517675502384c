import sys

from shape_modifiers.headless import main

sys.exit(main())
