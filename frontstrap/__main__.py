from frontstrap.orchestrator import main

raise SystemExit(main())
