"""Allow ``python -m co_drawing``"""

from .main import main

main()
