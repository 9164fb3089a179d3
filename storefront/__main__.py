from storefront.main import run

run()
