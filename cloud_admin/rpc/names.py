import re
from typing import Dict


class InvalidResourceNameError(ValueError):
    """ Raised when a resource name does not match the expected path template """


class PathTemplate:
    """ Resource path template, e.g., "projects/{project}/topics/{topic}" """

    def __init__(self, template: str):
        self.__template = template
        self.__variables = re.findall(r'{(\w+)}', template)
        self.__pattern = re.compile(
            '^' + re.sub(r'\\{(\w+)\\}', r'(?P<\1>[^/]+)', re.escape(template)) + '$'
        )

    @property
    def template(self) -> str:
        return self.__template

    def instantiate(self, **values: str) -> str:
        missing = [name for name in self.__variables if not values.get(name)]
        if missing:
            raise InvalidResourceNameError(f'Missing {", ".join(missing)} for {self.__template}')
        return self.__template.format(**values)

    def match(self, name: str) -> Dict[str, str]:
        matched = self.__pattern.match(name or '')
        if not matched:
            raise InvalidResourceNameError(f'"{name}" does not match {self.__template}')
        return matched.groupdict()

    def __repr__(self):
        return f'PathTemplate({self.__template})'


PROJECT_PATH_TEMPLATE = PathTemplate('projects/{project}')
TOPIC_PATH_TEMPLATE = PathTemplate('projects/{project}/topics/{topic}')
SUBSCRIPTION_PATH_TEMPLATE = PathTemplate('projects/{project}/subscriptions/{subscription}')
DATABASE_PATH_TEMPLATE = PathTemplate('projects/{project}/instances/{instance}/databases/{database}')
SESSION_PATH_TEMPLATE = PathTemplate('projects/{project}/instances/{instance}/databases/{database}/sessions/{session}')


def format_project_name(project: str) -> str:
    return PROJECT_PATH_TEMPLATE.instantiate(project=project)


def format_topic_name(project: str, topic: str) -> str:
    return TOPIC_PATH_TEMPLATE.instantiate(project=project, topic=topic)


def format_subscription_name(project: str, subscription: str) -> str:
    return SUBSCRIPTION_PATH_TEMPLATE.instantiate(project=project, subscription=subscription)


def format_database_name(project: str, instance: str, database: str) -> str:
    return DATABASE_PATH_TEMPLATE.instantiate(project=project, instance=instance, database=database)


def format_session_name(project: str, instance: str, database: str, session: str) -> str:
    return SESSION_PATH_TEMPLATE.instantiate(project=project, instance=instance, database=database, session=session)


def parse_topic_from_topic_name(topic_name: str) -> str:
    return TOPIC_PATH_TEMPLATE.match(topic_name)['topic']


def parse_project_from_topic_name(topic_name: str) -> str:
    return TOPIC_PATH_TEMPLATE.match(topic_name)['project']


def parse_project_from_subscription_name(subscription_name: str) -> str:
    return SUBSCRIPTION_PATH_TEMPLATE.match(subscription_name)['project']


def parse_subscription_from_subscription_name(subscription_name: str) -> str:
    return SUBSCRIPTION_PATH_TEMPLATE.match(subscription_name)['subscription']


def parse_session_name(session_name: str) -> Dict[str, str]:
    """ Split a fully-qualified session name into project, instance, database and session """
    return SESSION_PATH_TEMPLATE.match(session_name)
