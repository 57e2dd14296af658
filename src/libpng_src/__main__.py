from libpng_src.cli import main

raise SystemExit(main())
