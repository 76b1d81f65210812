from vindu.web import main

main()
