from stackup import main

main()
