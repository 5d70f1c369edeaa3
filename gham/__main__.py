from gham.main import main

main()
