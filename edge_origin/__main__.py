from edge_origin.service.server import main

main()
