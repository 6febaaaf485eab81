from swisp.repl import main

raise SystemExit(main())
