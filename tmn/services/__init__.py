"""Transaction handling, service errors, and the sales package and saved polygon services."""