from pr_annotator.cli import main

raise SystemExit(main())
