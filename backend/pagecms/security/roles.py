EDIT_CONTENT = "edit_content"
PUBLISH_CONTENT = "publish_content"
ADMINISTRATION = "administration"

# Pseudo-roles usable as access rule identities
EVERYONE = "everyone"
AUTHENTICATED_USERS = "authenticated_users"
