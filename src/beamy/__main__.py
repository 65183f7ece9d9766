import sys
from beamy.main import main

sys.exit(main())
