from cloud_admin.common.environments import flag

in_global_debug_mode = flag('CLOUD_ADMIN_DEBUG',
                            description='Enable the debug mode')
detailed_error = flag('CLOUD_ADMIN_DETAILED_ERROR', description='Provide more details on error')
