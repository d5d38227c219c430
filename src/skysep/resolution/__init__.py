# Resolution package
