from labpage.build import main

raise SystemExit(main())
