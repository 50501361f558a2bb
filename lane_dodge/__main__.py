from lane_dodge.app import main

raise SystemExit(main())
