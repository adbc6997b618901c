from filelimit.main import main

raise SystemExit(main())
