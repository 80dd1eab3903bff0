from .scripts.run_optimizer import main

raise SystemExit(main())
