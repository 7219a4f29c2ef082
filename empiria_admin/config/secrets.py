import json
import os

import boto3


def get_secret(secret_name: str, region_name: str = "us-east-1") -> dict:
    """
    Retrieves the given secret from AWS Secrets Manager

    :param secret_name str: the name of the secret to get
    :param region_name: the name of the AWS region, defaults to us-east-1
    :return dict: the decoded JSON secret
    """
    session = boto3.session.Session()
    client = session.client(service_name="secretsmanager", region_name=region_name)
    response = client.get_secret_value(SecretId=secret_name)
    return json.loads(response["SecretString"])


def load_secret_into_environ(secret_name: str, region_name: str = "us-east-1") -> list:
    """
    Copy every key of the secret into os.environ without overriding values
    that are already set. Returns the keys that were applied.
    """
    applied = []
    for key, value in get_secret(secret_name, region_name=region_name).items():
        if key not in os.environ:
            os.environ[key] = str(value)
            applied.append(key)
    return applied
